"""FastAPI application."""

from typing import Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from harvestguard.core import (
    assess,
    determine_most_urgent_risk,
    determine_overall_risk,
    evaluate,
    format_output,
    synthesize,
)
from harvestguard.notify import DispatchService, SyncService
from harvestguard.store import Advisory, CropBatchState, WeatherReading, get_store
from harvestguard.store.models import utcnow
from harvestguard.utils.config import settings
from harvestguard.utils.errors import CropStateError
from harvestguard.utils.logger import setup_logging

setup_logging()

app = FastAPI(
    title="HarvestGuard API",
    description="Crop storage risk assessment and advisory delivery",
    version=settings.app.version,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

service = DispatchService(store=get_store())

Language = Literal["bn", "en"]


class WeatherInput(BaseModel):
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    rainfall_mm: Optional[float] = None
    wind_speed_ms: Optional[float] = None
    rain_chance: Optional[float] = None

    def to_reading(self) -> WeatherReading:
        return WeatherReading.from_dict(self.model_dump())


class EvaluateRequest(BaseModel):
    farmer_id: str
    weather: WeatherInput
    crops: list[dict] = Field(default_factory=list)
    language: Optional[Language] = None
    style: Literal["farmer", "json"] = "farmer"
    dispatch: bool = False
    phone: Optional[str] = None


class EvaluateResponse(BaseModel):
    farmer_id: str
    timestamp: str
    overall_risk: str
    assessments: list[dict]
    advisories: list[dict]
    formatted_output: str
    dispatch_results: list[str] = Field(default_factory=list)


class AdvisoryInput(BaseModel):
    type: str
    severity: Literal["low", "medium", "high"]
    title: str
    message: str
    actions: list[str] = Field(default_factory=list)
    conditions: dict = Field(default_factory=dict)
    level: Optional[str] = None
    crop_id: Optional[str] = None


class DispatchRequest(BaseModel):
    farmer_id: str
    advisories: list[AdvisoryInput]
    language: Optional[Language] = None
    phone: Optional[str] = None


class PreferencesUpdate(BaseModel):
    scan_results: Optional[bool] = None
    pending_scans: Optional[bool] = None
    weather_advisories: Optional[bool] = None
    harvest_reminders: Optional[bool] = None


class ConnectivityUpdate(BaseModel):
    online: bool


class RemindersRequest(BaseModel):
    crops: list[dict]
    language: Optional[Language] = None


class PendingActionRequest(BaseModel):
    type: Literal["create", "update", "delete"]
    resource: Literal["crop-batch", "health-scan", "advisory"]
    data: dict = Field(default_factory=dict)


def _crops(records: list[dict]) -> list[CropBatchState]:
    try:
        return [CropBatchState.from_dict(record) for record in records]
    except CropStateError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "storage": settings.storage.backend,
        "farmers": len(service.sessions.farmers()),
        "timestamp": utcnow().isoformat(),
    }


@app.post("/api/v1/evaluate", response_model=EvaluateResponse)
async def run_evaluation(request: EvaluateRequest):
    """Assess crops against the weather and synthesize advisories."""
    crops = _crops(request.crops)
    try:
        weather = request.weather.to_reading()
        assessments = [assess(crop, weather) for crop in crops]
        advisories = evaluate(request.farmer_id, weather, crops, request.language)

        results = []
        if request.dispatch:
            dispatcher = service.for_farmer(request.farmer_id, phone=request.phone)
            results = dispatcher.dispatch(advisories, request.language)

        return EvaluateResponse(
            farmer_id=request.farmer_id,
            timestamp=weather.captured_at.isoformat(),
            overall_risk=determine_overall_risk(assessments),
            assessments=[a.to_dict() for a in assessments],
            advisories=[a.to_dict() for a in advisories],
            formatted_output=format_output(request.farmer_id, weather, advisories, request.style),
            dispatch_results=results,
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/v1/urgent-risk")
async def urgent_risk(weather: WeatherInput, language: Optional[Language] = None):
    """Most urgent area-wide risk for a weather reading."""
    risk = determine_most_urgent_risk(weather.to_reading())
    if risk is None:
        return {"urgent": None, "advisory": None}
    return {"urgent": risk.to_dict(), "advisory": synthesize(risk, language=language).to_dict()}


@app.post("/api/v1/dispatch")
async def dispatch_advisories(request: DispatchRequest):
    """Deliver advisories through the farmer's notification dispatcher."""
    try:
        dispatcher = service.for_farmer(request.farmer_id, phone=request.phone)
        advisories = [Advisory(**a.model_dump(), language=request.language or "bn") for a in request.advisories]
        results = dispatcher.dispatch(advisories, request.language)
        return {
            "farmer_id": request.farmer_id,
            "results": [{"key": a.key, "status": s} for a, s in zip(advisories, results)],
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/api/v1/farmers/{farmer_id}/preferences")
async def get_preferences(farmer_id: str):
    return service.sessions.get(farmer_id).preferences.to_dict()


@app.put("/api/v1/farmers/{farmer_id}/preferences")
async def update_preferences(farmer_id: str, update: PreferencesUpdate):
    session = service.sessions.get(farmer_id)
    return session.update_preferences(**update.model_dump()).to_dict()


@app.put("/api/v1/farmers/{farmer_id}/connectivity")
async def set_connectivity(farmer_id: str, update: ConnectivityUpdate):
    """Mark a farmer online or offline; coming online flushes the queue."""
    dispatcher = service.for_farmer(farmer_id)
    dispatcher.session.set_online(update.online)
    flushed = dispatcher.flush_queue() if update.online else []
    return {"farmer_id": farmer_id, "online": update.online, "flushed": len(flushed)}


@app.get("/api/v1/farmers/{farmer_id}/queue")
async def get_queue(farmer_id: str):
    entries = service.sessions.get(farmer_id).queue.entries()
    return {"count": len(entries), "entries": [e.to_dict() for e in entries]}


@app.post("/api/v1/farmers/{farmer_id}/queue/drain")
async def drain_queue(farmer_id: str):
    """Deliver queued notifications that are due."""
    delivered = service.for_farmer(farmer_id).flush_queue()
    return {"delivered": len(delivered), "entries": [e.to_dict() for e in delivered]}


@app.post("/api/v1/farmers/{farmer_id}/harvest-reminders")
async def harvest_reminders(farmer_id: str, request: RemindersRequest):
    fired = service.for_farmer(farmer_id).schedule_harvest_reminders(_crops(request.crops), request.language)
    return {"fired": fired}


@app.post("/api/v1/farmers/{farmer_id}/pending-actions")
async def queue_pending_action(farmer_id: str, request: PendingActionRequest):
    action = service.sessions.get(farmer_id).sync_queue.queue_action(request.type, request.resource, request.data)
    return action.to_dict()


@app.post("/api/v1/farmers/{farmer_id}/sync")
async def sync_pending(farmer_id: str):
    """Replay queued actions against the server."""
    sync = SyncService(service.sessions.get(farmer_id).sync_queue)
    try:
        return sync.sync_pending()
    finally:
        sync.close()
