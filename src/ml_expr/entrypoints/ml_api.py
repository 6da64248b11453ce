"""
ML Expression API Entrypoint - Thin API with Command Dispatch
API receives ML queries and dispatches commands through message bus
"""
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import create_engine
import logging

import config
from datasources.adapters import orm
from ml_expr.adapters.plugin_client import PluginTransportError
from ml_expr.domain.commands import EvaluateMLQuery
from ml_expr.domain.model import CommandValidationError, PluginAPIError, SerializationError
from ml_expr.service_layer import messagebus
from ml_expr.service_layer.handlers import DataSourceNotFound
from ml_expr.service_layer.unit_of_work import SqlAlchemyUnitOfWork
from shared.domain.fields import FieldError

logging.basicConfig(
    level=getattr(logging, config.get_log_level()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="ML Expression API",
    description="Runs ML outlier queries through the ML plugin API",
    version="1.0.0"
)


# Initialize database and ORM mappers (Cosmic Python pattern)
@app.on_event("startup")
async def startup_event():
    engine = create_engine(config.get_postgres_uri())
    orm.metadata.create_all(engine)
    orm.start_mappers()
    logger.info("✓ ML Expression Database initialized")

# ---------- Request/Response models ----------

class MLQueryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: Dict[str, Any]
    from_time: datetime = Field(alias="from")
    to_time: datetime = Field(alias="to")


class MLQueryResponse(BaseModel):
    status: str
    data: Any = None


# ---------- Endpoints ----------

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "ml-expr-api",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@app.post("/api/v1/ml/query", response_model=MLQueryResponse)
def evaluate_ml_query(body: MLQueryRequest, request: Request):
    """
    Evaluate an ML expression query over the requested time window.

    Following Cosmic Python pattern: API receives payload and dispatches command.
    Cookies of the incoming request are forwarded to the plugin API when the
    referenced data source allows them.
    """
    cmd = EvaluateMLQuery(
        query=body.query,
        from_time=body.from_time,
        to_time=body.to_time,
        cookies=dict(request.cookies),
    )

    try:
        uow = SqlAlchemyUnitOfWork()
        result = messagebus.handle(cmd, uow)

    except CommandValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DataSourceNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PluginAPIError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except (PluginTransportError, SerializationError) as e:
        raise HTTPException(status_code=502, detail=f"Plugin API error: {e}")
    except FieldError as e:
        raise HTTPException(status_code=500, detail=f"Invalid data source configuration: {e}")

    return MLQueryResponse(status="success", data=result)
