#!/usr/bin/env python3
"""Local development server for Pool Pal.

Production runs under gunicorn (``gunicorn -c gunicorn.conf.py wsgi:app``);
this entry point refuses to start when FLASK_ENV=production.
"""
import os
import sys

from poolpal import create_app
from poolpal.config import ENV_INFO

if __name__ == '__main__':
    if ENV_INFO.name == 'production':
        sys.stderr.write("FLASK_ENV=production: use gunicorn -c gunicorn.conf.py wsgi:app\n")
        raise SystemExit(2)

    app = create_app()
    debug = os.environ.get('FLASK_DEBUG', '1').strip().lower() in {'1', 'true', 'yes', 'on'}
    app.run(
        host=os.environ.get('HOST', '127.0.0.1'),
        port=int(os.environ.get('PORT', 5000)),
        debug=debug,
        threaded=True,
    )
