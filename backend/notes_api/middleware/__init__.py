# Middleware package init
"""
Notes API: Middleware Package
================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: assigns the correlation id used by every later log line
    2. Logging: records method, path, status and duration
    3. CORS: FastAPI's CORSMiddleware, open to every origin

Responses pass back through the chain in reverse, which is how the
request id header and the logged status/duration reach the response.
"""
