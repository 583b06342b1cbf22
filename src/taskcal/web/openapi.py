from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

API_PREFIX = "/api"


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="TaskCal API",
            version="0.1.0",
            summary="Personal task calendar",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
                "description": "Token returned by POST /api/login, valid for one hour by default",
            },
        }

        # Apply security globally (will be overridden for public endpoints)
        openapi_schema["security"] = [{"BearerAuth": []}]

        public_endpoints = {
            ("POST", f"{API_PREFIX}/login"),
            ("POST", f"{API_PREFIX}/users"),
            ("GET", "/health"),
        }

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in public_endpoints:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"error": "Credenciales inválidas", "type": "invalid_credentials"},
                {"error": "No encontrada", "type": "not_found"},
                {"error": "No autorizado", "type": "access_denied"},
            ]
        }
    }


class SuccessResponse(BaseModel):
    """Acknowledgement returned by mutating endpoints."""

    success: bool = Field(True, description="Always true; failures use ErrorResponse")
