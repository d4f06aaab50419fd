"""
FastAPI application exposing the business hours calculator resource.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse

from .. import __version__
from ..adapters.json_store import JsonFileRecordStore
from ..adapters.memory_store import InMemoryRecordStore
from ..config import AppConfig
from ..domain.business_hours_engine import BusinessHoursEngine
from ..domain.exceptions import (
    DeadlineOutOfRangeError,
    RecordIdAlreadyAssignedError,
    StartingDateTimeFormatError,
)
from ..services.calculator_service import BusinessHoursCalculatorService, RecordStoreProtocol
from .headers import (
    create_entity_creation_alert,
    create_entity_deletion_alert,
    create_entity_update_alert,
    create_failure_alert,
)
from .schemas import BusinessHoursCalculatorSchema

logger = logging.getLogger(__name__)

ENTITY_NAME = "businessHoursCalculator"
RESOURCE_PATH = "/business-hours-calculators"

router = APIRouter()


def get_service(request: Request) -> BusinessHoursCalculatorService:
    return request.app.state.calculator_service


def get_application_name(request: Request) -> str:
    return request.app.state.config.application_name


def _payload(schema: BusinessHoursCalculatorSchema) -> dict:
    return schema.model_dump(by_alias=True)


@router.post(RESOURCE_PATH, status_code=201, response_model=BusinessHoursCalculatorSchema)
def create_business_hours_calculator(
    calculator: BusinessHoursCalculatorSchema,
    service: BusinessHoursCalculatorService = Depends(get_service),
    application_name: str = Depends(get_application_name),
):
    """
    Create a new record.

    Returns 201 with the created record, or 400 if the record already has an
    id or its starting datetime is malformed.
    """
    logger.debug("REST request to save BusinessHoursCalculator : %s", calculator)
    result = service.create(calculator.to_record())
    headers = create_entity_creation_alert(application_name, ENTITY_NAME, str(result.id))
    headers["Location"] = f"/api{RESOURCE_PATH}/{result.id}"
    return JSONResponse(
        status_code=201,
        content=_payload(BusinessHoursCalculatorSchema.from_record(result)),
        headers=headers,
    )


@router.put(RESOURCE_PATH, response_model=BusinessHoursCalculatorSchema)
def update_business_hours_calculator(
    calculator: BusinessHoursCalculatorSchema,
    service: BusinessHoursCalculatorService = Depends(get_service),
    application_name: str = Depends(get_application_name),
):
    """
    Update an existing record as given. Records without an id are created.
    """
    logger.debug("REST request to update BusinessHoursCalculator : %s", calculator)
    if calculator.id is None:
        return create_business_hours_calculator(calculator, service, application_name)

    result = service.update(calculator.to_record())
    return JSONResponse(
        status_code=200,
        content=_payload(BusinessHoursCalculatorSchema.from_record(result)),
        headers=create_entity_update_alert(application_name, ENTITY_NAME, str(calculator.id)),
    )


@router.get(RESOURCE_PATH, response_model=List[BusinessHoursCalculatorSchema])
def get_all_business_hours_calculators(
    service: BusinessHoursCalculatorService = Depends(get_service),
):
    """List all records with their business hours formatted for display."""
    logger.debug("REST request to get all BusinessHoursCalculators")
    return [
        _payload(BusinessHoursCalculatorSchema.from_record(record))
        for record in service.find_all()
    ]


@router.get(f"{RESOURCE_PATH}/{{record_id}}", response_model=BusinessHoursCalculatorSchema)
def get_business_hours_calculator(
    record_id: int,
    service: BusinessHoursCalculatorService = Depends(get_service),
):
    logger.debug("REST request to get BusinessHoursCalculator : %s", record_id)
    record = service.find_one(record_id)
    if record is None:
        return Response(status_code=404)
    return _payload(BusinessHoursCalculatorSchema.from_record(record))


@router.delete(f"{RESOURCE_PATH}/{{record_id}}")
def delete_business_hours_calculator(
    record_id: int,
    service: BusinessHoursCalculatorService = Depends(get_service),
    application_name: str = Depends(get_application_name),
):
    logger.debug("REST request to delete BusinessHoursCalculator : %s", record_id)
    service.delete(record_id)
    return Response(
        status_code=200,
        headers=create_entity_deletion_alert(application_name, ENTITY_NAME, str(record_id)),
    )


async def _bad_request_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": str(exc)})


async def _id_exists_handler(request: Request, exc: RecordIdAlreadyAssignedError) -> Response:
    return Response(
        status_code=400,
        headers=create_failure_alert(
            get_application_name(request), ENTITY_NAME, exc.error_key, str(exc)
        ),
    )


def build_record_store(config: AppConfig) -> RecordStoreProtocol:
    """Instantiate the record store selected in the configuration."""
    if config.storage.backend == "json":
        return JsonFileRecordStore(config.storage.path)
    return InMemoryRecordStore()


def create_app(
    config: Optional[AppConfig] = None,
    record_store: Optional[RecordStoreProtocol] = None,
) -> FastAPI:
    """
    Build the application.

    The business hours window is read from ``config`` once here and injected
    into the engine; it is never modified while serving requests.
    """
    config = config or AppConfig()
    engine = BusinessHoursEngine(
        business_hours=config.build_business_hours(),
        interval_unit=config.interval_unit,
    )
    service = BusinessHoursCalculatorService(
        record_store=record_store if record_store is not None else build_record_store(config),
        engine=engine,
    )

    app = FastAPI(title="Business Hours Calculator", version=__version__)
    app.state.config = config
    app.state.calculator_service = service
    app.add_exception_handler(StartingDateTimeFormatError, _bad_request_handler)
    app.add_exception_handler(DeadlineOutOfRangeError, _bad_request_handler)
    app.add_exception_handler(RecordIdAlreadyAssignedError, _id_exists_handler)
    app.include_router(router, prefix="/api", tags=["Business Hours Calculators"])

    @app.get("/api/health")
    def health_check():
        return {"status": "ok"}

    return app
