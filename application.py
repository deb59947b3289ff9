#!/usr/bin/env python

"""
This is the application entry point for gunicorn and the Flask CLI.  It creates the Flask
application instance and calls create_app to configure this instance.
"""

import os

import sentry_sdk
from flask import Flask
from sentry_sdk.integrations.flask import FlaskIntegration
from werkzeug.middleware.proxy_fix import ProxyFix

# Imports out of order so .env values are visible when app.config is imported
from dotenv import load_dotenv

load_dotenv()

from app import create_app  # noqa E402

sentry_sdk.init(
    dsn=os.environ.get('SENTRY_URL', ''),
    integrations=[FlaskIntegration()],
    # Request bodies carry PII
    send_default_pii=False,
    max_request_body_size='never',
)

application = Flask('app')
application.wsgi_app = ProxyFix(application.wsgi_app)
create_app(application)
