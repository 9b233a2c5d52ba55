#!/usr/bin/env python
"""
Main application entry point for the Newspaper Subscription API.
"""
from newsdesk import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=app.config["PORT"])
