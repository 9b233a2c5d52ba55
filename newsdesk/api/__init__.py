"""
HTTP API: one Flask-RESTX namespace per resource.
"""
