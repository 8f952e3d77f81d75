import argparse
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from .api import router, register_error_handler
from .register import BOOTSTRAP_EVENTS, EventStore, RegisterError

# --- Configuration ---
SERVICE_NAME = "Production Event Register"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8081
LOG_FORMAT = "[REGISTER] %(asctime)s | %(levelname)s | %(message)s"

logger = logging.getLogger("ProductionRegister")


def create_app(store: Optional[EventStore] = None) -> FastAPI:
    """
    Build the API around an event store.

    Args:
        store: Register to serve (seeded with BOOTSTRAP_EVENTS if None)
    """
    app = FastAPI(title=f"{SERVICE_NAME} API")

    # Allow CORS for dashboards
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store if store is not None else EventStore(BOOTSTRAP_EVENTS)
    app.add_exception_handler(RegisterError, register_error_handler)
    app.include_router(router)

    @app.get("/")
    def read_root():
        return {"status": "ok", "service": SERVICE_NAME}

    return app


def main():
    parser = argparse.ArgumentParser(description=SERVICE_NAME)
    parser.add_argument("--host", default=DEFAULT_HOST, help="Interface to bind")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Port to listen on")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--no-seed", action="store_true", help="Start with an empty register")
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT, datefmt="%H:%M:%S")

    store = EventStore(() if args.no_seed else BOOTSTRAP_EVENTS)
    app = create_app(store)

    logger.info(f"Server listening on {args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
