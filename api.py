"""
FastAPI REST API for the Cube.js bridge.

Translates MBQL queries to Cube.js queries and exposes Cube.js discovery.
"""

import os
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from cube_bridge import CubeConfig, CubeDriver
from cube_bridge.adapters.cubejs import CubeQueryTranslator
from cube_bridge.core.errors import ConnectivityError
from cube_bridge.core.models import StoredField, TableInfo
from cube_bridge.query.translator import QueryTranslator
from cube_bridge.schema.catalog import InMemoryFieldStore, InMemoryMetricCatalog

load_dotenv()

app = FastAPI(
    title="Cube Bridge API",
    description="Translate MBQL queries to Cube.js REST API queries",
    version="1.0.0",
)


class TranslateRequest(BaseModel):
    """Request model for query translation."""
    query: Dict[str, Any] = Field(..., description="MBQL query (inner or outer)")
    fields: Dict[int, StoredField] = Field(
        default_factory=dict,
        description="Field store snapshot: field ID -> {name, description (role)}",
    )


class TranslateResponse(BaseModel):
    """Response model for query translation."""
    native_query: Dict[str, Any]
    aggregation: bool
    warnings: List[str] = Field(default_factory=list)


class CubesResponse(BaseModel):
    """Response model for database description."""
    tables: List[TableInfo]


def get_driver(base_url: Optional[str] = None) -> CubeDriver:
    """Create a driver from the environment configuration."""
    overrides = {"base_url": base_url} if base_url else {}
    config = CubeConfig.from_env(**overrides)
    return CubeDriver.from_cubejs(config, InMemoryFieldStore(), InMemoryMetricCatalog())


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/can-connect")
async def can_connect():
    """Check that the configured Cube.js deployment answers."""
    try:
        driver = get_driver()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"can_connect": driver.can_connect()}


@app.get("/cubes", response_model=CubesResponse)
async def list_cubes():
    """List the cubes of the configured Cube.js deployment as tables."""
    try:
        tables = get_driver().describe_database()["tables"]
    except ConnectivityError as e:
        raise HTTPException(status_code=502, detail=f"Cannot connect to Cube.js: {e}")
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return CubesResponse(tables=sorted(tables, key=lambda table: table.name))


@app.post("/translate", response_model=TranslateResponse)
async def translate(request: TranslateRequest):
    """
    Translate an MBQL query to a Cube.js query.

    Field references are resolved against the field snapshot sent with the
    request; nothing is sent to Cube.js.
    """
    cube_translator = CubeQueryTranslator(InMemoryFieldStore(request.fields))
    try:
        native = QueryTranslator(cube_translator).translate(request.query)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Query translation failed: {str(e)}")

    return TranslateResponse(
        native_query=native.query,
        aggregation=native.aggregation,
        warnings=native.warnings,
    )


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("API_PORT", "8000"))
    host = os.getenv("API_HOST", "0.0.0.0")

    uvicorn.run(app, host=host, port=port)
