"""
Newspapers namespace: the publications catalogue.
"""
from flask_restx import Namespace

newspaper_ns = Namespace(
    'newspapers',
    description='Newspaper catalogue operations'
)

from . import routes
