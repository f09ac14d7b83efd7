"""WSGI entrypoint for deploying the marginal relief calculator."""

from marginalrelief.backend.app import create_app

# Passenger and most WSGI servers look for a module-level ``application``.
application = create_app()
