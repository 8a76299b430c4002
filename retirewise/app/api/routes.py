"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from loguru import logger
from pydantic import ValidationError

from retirewise import __version__
from retirewise.core.inputs import DEFAULT_INPUTS, InputUpdateError, merge_inputs, update_inputs
from retirewise.core.portfolio import summarize_holdings
from retirewise.core.projection import calculate_retirement
from retirewise.core.share import ShareTokenError, decode_inputs, encode_inputs
from retirewise.models import FinancialInputs
from retirewise.schemas.health import HealthResponse
from retirewise.schemas.planner import (
    AdviceResponse,
    InputsUpdateRequest,
    PortfolioRequest,
    SharedPlanResponse,
    ShareResponse,
)
from retirewise.services.base import ServiceError

api_bp = Blueprint("api", __name__)


def _service(name: str) -> Any:
    return current_app.extensions["retirewise"][name]


def _inputs_from_body() -> FinancialInputs:
    """Partial input record from the JSON body, merged onto the defaults."""
    payload = request.get_json(force=True, silent=False)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise InputUpdateError(["request body must be a JSON object"])
    return merge_inputs(payload)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    errors = exc.errors(include_url=False, include_context=False)
    return jsonify({"detail": errors}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(InputUpdateError)
def _handle_input_error(exc: InputUpdateError):
    return jsonify({"detail": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(ShareTokenError)
def _handle_share_error(exc: ShareTokenError):
    return jsonify({"detail": str(exc)}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(ServiceError)
def _handle_service_error(exc: ServiceError):
    logger.error(f"{type(exc).__name__}: {exc}")
    return jsonify({"detail": str(exc)}), HTTPStatus.SERVICE_UNAVAILABLE


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    response = HealthResponse(status="ok", version=__version__)
    return jsonify(response.model_dump())


@api_bp.get("/inputs/default")
def default_inputs() -> Any:
    return jsonify(DEFAULT_INPUTS.model_dump())


@api_bp.post("/inputs/update")
def inputs_update() -> Any:
    """Apply field changes; breakdown changes re-derive currentSavings."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = InputsUpdateRequest.model_validate(raw_payload)
    inputs = merge_inputs(payload.inputs)
    updated = update_inputs(inputs, payload.changes)
    return jsonify(updated.model_dump())


@api_bp.post("/projection")
def projection() -> Any:
    """Retirement projection for the posted (partial) inputs."""
    inputs = _inputs_from_body()
    result = calculate_retirement(inputs)
    return jsonify(result.model_dump())


@api_bp.post("/share")
def share() -> Any:
    inputs = _inputs_from_body()
    response = ShareResponse(token=encode_inputs(inputs))
    return jsonify(response.model_dump())


@api_bp.get("/share/<path:token>")
def shared_plan(token: str) -> Any:
    """Restore inputs from a share token and return them with their projection."""
    inputs = decode_inputs(token)
    response = SharedPlanResponse(inputs=inputs, result=calculate_retirement(inputs))
    return jsonify(response.model_dump())


@api_bp.post("/advice")
def advice() -> Any:
    inputs = _inputs_from_body()
    result = calculate_retirement(inputs)
    text = _service("advisory").get_advice(inputs, result)
    return jsonify(AdviceResponse(advice=text).model_dump())


@api_bp.get("/quotes")
def quotes() -> Any:
    query = request.args.get("q", "").strip()
    if not query:
        return jsonify({"detail": "query parameter 'q' is required"}), HTTPStatus.BAD_REQUEST

    quote = _service("quotes").lookup(query)
    if quote is None:
        return (
            jsonify({"detail": f"Could not find stock details for '{query}'."}),
            HTTPStatus.NOT_FOUND,
        )
    return jsonify(quote.model_dump())


@api_bp.post("/portfolio/summary")
def portfolio_summary() -> Any:
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = PortfolioRequest.model_validate(raw_payload)
    return jsonify(summarize_holdings(payload.holdings).model_dump())


@api_bp.get("/news")
def news() -> Any:
    digest = _service("news").digest()
    return jsonify(digest.model_dump())
