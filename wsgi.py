"""
Production WSGI entry point for gunicorn (``gunicorn wsgi:app``).

The Flask app is built on first use rather than at import, so settings
injected into the environment by the platform are picked up.
"""
import os

_app = None


def get_app():
    """Build the app once and reuse it."""
    global _app
    if _app is None:
        from jobsearch_crm import create_app
        _app = create_app(os.environ.get('APP_CONFIG', 'production'))
    return _app


def app(environ, start_response):
    return get_app()(environ, start_response)


if __name__ == '__main__':
    get_app().run()
