# Middleware package init
"""
RecordStore — Middleware Package
=================================

Middleware Chain (order matters):
    Request → [Request context] → [GZip] → [CORS] → Route Handler

    request_context.py sets the request ID before anything else runs, so the
    access line and every log line from the handler share it.
"""
