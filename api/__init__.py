"""FastAPI service for the audio segment permutation codec.

Endpoints:
- /health: Service health check
- /descriptor: Parse or build encoding codes
- /encode, /decode: WAV in, WAV out

Example:
    To run the API server:

    $ uvicorn api.main:app --host 0.0.0.0 --port 8000
"""

from .main import app, create_app

__all__ = ["app", "create_app"]
