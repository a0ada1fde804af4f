# Middleware package init
"""
Coffee Menu Backend — Middleware Package
=========================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → [Errors] → Route Handler

    1. Request ID: correlation id for every log line of the request
    2. Logging: method, path, status and duration, tagged with the id
    3. CORS: FastAPI's CORSMiddleware, any origin by default
    4. Unexpected errors: last-resort 500 body, still inside CORS
"""
