"""FastAPI dependencies resolved from application state"""

from fastapi import Request
from database.directory import WholesaleDirectory
from services.checkout import CheckoutOrchestrator


def get_directory(request: Request) -> WholesaleDirectory:
    return request.app.state.directory


def get_orchestrator(request: Request) -> CheckoutOrchestrator:
    return request.app.state.orchestrator
