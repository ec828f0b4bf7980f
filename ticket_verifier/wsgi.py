# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""WSGI entry point, e.g. ``gunicorn --threads 8 ticket_verifier.wsgi:app``."""

from ticket_verifier.app import create_app

app = create_app()
