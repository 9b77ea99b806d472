"""WSGI entry point (``gunicorn -c gunicorn.conf.py``)."""

from restoreviews import create_app

app = create_app()
