"""
Admin console API.

Direct DynamoDB editing of the developer profile, projects and recruiter
profiles, with per-stage sync tracking and export/upload to the data bucket.

Local dev:
    uvicorn admin_api.app:app --reload --port 3001
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict

import uvicorn
from fastapi import APIRouter, Body, Depends, FastAPI
from fastapi.responses import JSONResponse

from src.utils.ids import LINK_TTL_DAYS

from .aws_operations import AWSOperations
from .config import ADMIN_CONFIG, STAGES
from .schemas import validate_record
from .sync_state import SyncState

logger = logging.getLogger(__name__)

ADMIN_PORT = 3001


@lru_cache(maxsize=1)
def get_aws_operations() -> AWSOperations:
    return AWSOperations(ADMIN_CONFIG)


@lru_cache(maxsize=1)
def get_sync_state() -> SyncState:
    state = SyncState(ADMIN_CONFIG.state_path)
    state.load()
    return state


def _now() -> datetime:
    return datetime.now(timezone.utc)


def error_response(status_code: int, error: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, **extra})


def validation_failed(result: Dict[str, Any]) -> JSONResponse:
    return error_response(400, "Validation failed", details=result["errors"])


def mutation_ok(state: SyncState, stage: str, message: str, **extra: Any) -> Dict[str, Any]:
    state.mark_dirty(stage)
    return {"success": True, "message": message, **extra, "syncStatus": {"isDirty": True}}


def create_environment_router(stage: str) -> APIRouter:
    """Build the router for one stage, mounted at /api/{stage}."""
    router = APIRouter(prefix=f"/api/{stage}", tags=[stage])

    @router.get("/sync-status")
    def sync_status(state: SyncState = Depends(get_sync_state)) -> Dict[str, Any]:
        return state.get(stage)

    # Developer

    @router.get("/developer")
    def get_developer(ops: AWSOperations = Depends(get_aws_operations)) -> Any:
        try:
            items = ops.get_all_items(stage, "developer")
        except Exception as e:
            logger.exception("Failed to read developer (%s)", stage)
            return error_response(500, str(e))
        return items[0] if items else {}

    @router.put("/developer")
    def put_developer(
        data: Dict[str, Any] = Body(...),
        ops: AWSOperations = Depends(get_aws_operations),
        state: SyncState = Depends(get_sync_state),
    ) -> Any:
        result = validate_record("developer", data)
        if not result["valid"]:
            return validation_failed(result)
        try:
            ops.update_item(stage, "developer", data)
        except Exception as e:
            logger.exception("Failed to update developer (%s)", stage)
            return error_response(500, str(e))
        return mutation_ok(state, stage, "Developer updated")

    # Projects

    @router.get("/projects")
    def list_projects(ops: AWSOperations = Depends(get_aws_operations)) -> Any:
        try:
            return ops.get_all_items(stage, "projects")
        except Exception as e:
            logger.exception("Failed to list projects (%s)", stage)
            return error_response(500, str(e))

    @router.post("/projects")
    def create_project(
        data: Dict[str, Any] = Body(...),
        ops: AWSOperations = Depends(get_aws_operations),
        state: SyncState = Depends(get_sync_state),
    ) -> Any:
        result = validate_record("projects", data)
        if not result["valid"]:
            return validation_failed(result)
        try:
            ops.create_item(stage, "projects", data)
        except Exception as e:
            logger.exception("Failed to create project (%s)", stage)
            return error_response(500, str(e))
        return mutation_ok(state, stage, "Project created")

    @router.put("/projects/{project_id}")
    def update_project(
        project_id: str,
        data: Dict[str, Any] = Body(...),
        ops: AWSOperations = Depends(get_aws_operations),
        state: SyncState = Depends(get_sync_state),
    ) -> Any:
        result = validate_record("projects", data)
        if not result["valid"]:
            return validation_failed(result)
        try:
            ops.replace_item(stage, "projects", {"id": project_id}, data)
        except Exception as e:
            logger.exception("Failed to update project %s (%s)", project_id, stage)
            return error_response(500, str(e))
        return mutation_ok(state, stage, "Project updated")

    @router.delete("/projects/{project_id}")
    def delete_project(
        project_id: str,
        ops: AWSOperations = Depends(get_aws_operations),
        state: SyncState = Depends(get_sync_state),
    ) -> Any:
        try:
            ops.delete_item(stage, "projects", {"id": project_id})
        except Exception as e:
            logger.exception("Failed to delete project %s (%s)", project_id, stage)
            return error_response(500, str(e))
        return mutation_ok(state, stage, "Project deleted")

    # Recruiters

    @router.get("/recruiters")
    def list_recruiters(ops: AWSOperations = Depends(get_aws_operations)) -> Any:
        try:
            return ops.get_all_items(stage, "recruiters")
        except Exception as e:
            logger.exception("Failed to list recruiters (%s)", stage)
            return error_response(500, str(e))

    @router.post("/recruiters")
    def create_recruiter(
        data: Dict[str, Any] = Body(...),
        ops: AWSOperations = Depends(get_aws_operations),
        state: SyncState = Depends(get_sync_state),
    ) -> Any:
        link_id = data.get("linkId")
        if not link_id:
            return error_response(400, "Link ID is required")

        cognito_result = ops.create_cognito_user(stage, link_id)
        if not cognito_result["success"]:
            return error_response(500, f"Failed to create Cognito user: {cognito_result['error']}")

        try:
            ops.create_item(stage, "recruiters", data)
        except Exception as e:
            logger.exception("Failed to create recruiter %s (%s)", link_id, stage)
            return error_response(500, f"Recruiter creation failed: {e}", success=False)

        return mutation_ok(
            state,
            stage,
            "Recruiter and Cognito user created successfully",
            cognitoUser={"username": cognito_result["username"]},
        )

    @router.put("/recruiters/{link_id}")
    def update_recruiter(
        link_id: str,
        data: Dict[str, Any] = Body(...),
        ops: AWSOperations = Depends(get_aws_operations),
        state: SyncState = Depends(get_sync_state),
    ) -> Any:
        result = validate_record("recruiters", data)
        if not result["valid"]:
            return validation_failed(result)
        try:
            ops.replace_item(stage, "recruiters", {"linkId": link_id}, data)
        except Exception as e:
            logger.exception("Failed to update recruiter %s (%s)", link_id, stage)
            return error_response(500, str(e))
        return mutation_ok(state, stage, "Recruiter updated")

    @router.delete("/recruiters/{link_id}")
    def delete_recruiter(
        link_id: str,
        ops: AWSOperations = Depends(get_aws_operations),
        state: SyncState = Depends(get_sync_state),
    ) -> Any:
        try:
            ops.delete_item(stage, "recruiters", {"linkId": link_id})
        except Exception as e:
            logger.exception("Failed to delete recruiter %s (%s)", link_id, stage)
            return error_response(500, str(e))
        return mutation_ok(state, stage, "Recruiter deleted")

    # Export and links

    @router.post("/export-upload")
    def export_upload(
        ops: AWSOperations = Depends(get_aws_operations),
        state: SyncState = Depends(get_sync_state),
    ) -> Any:
        try:
            export_results = ops.export_to_files(stage)
            ops.upload_exports(stage)
        except Exception as e:
            logger.exception("Export/upload failed (%s)", stage)
            return error_response(500, str(e))

        last_sync = state.mark_synced(stage)
        return {
            "success": True,
            "message": "Export and upload completed",
            "exportResults": export_results,
            "syncStatus": {"isDirty": False, "lastSync": last_sync},
        }

    @router.post("/links/generate/{link_id}")
    def generate_link(link_id: str, ops: AWSOperations = Depends(get_aws_operations)) -> Any:
        try:
            body = ops.invoke_link_generator(stage, {"linkId": link_id, "createRecruiterProfile": False})
        except Exception as e:
            logger.exception("Link generation failed for %s (%s)", link_id, stage)
            return error_response(500, f"Link generation failed: {e}", success=False)

        now = _now()
        return {
            "success": True,
            "url": body.get("link"),
            "linkId": body.get("linkId"),
            "expiresAt": (now + timedelta(days=LINK_TTL_DAYS)).isoformat(),
            "generatedAt": now.isoformat(),
        }

    @router.post("/links/remove/{link_id}")
    def remove_link(link_id: str, ops: AWSOperations = Depends(get_aws_operations)) -> Any:
        try:
            body = ops.invoke_link_generator(stage, {"linkId": link_id, "action": "remove"})
        except Exception as e:
            logger.exception("Link removal failed for %s (%s)", link_id, stage)
            return error_response(500, f"Link removal failed: {e}", success=False)

        return {
            "success": True,
            "message": body.get("message") or "Link removed successfully",
            "removedAt": _now().isoformat(),
        }

    return router


@asynccontextmanager
async def lifespan(app: FastAPI):
    get_sync_state()
    logger.info("Admin console managing %s for stages %s", ", ".join(ADMIN_CONFIG.tables), ", ".join(STAGES))
    yield


app = FastAPI(
    title="Portfolio Admin API",
    description="Direct DynamoDB editing with sync status tracking.",
    version="0.1.0",
    lifespan=lifespan,
)

for _stage in STAGES:
    app.include_router(create_environment_router(_stage))


@app.get("/health", include_in_schema=False)
def health() -> Dict[str, str]:
    return {"status": "ok"}


def main() -> None:
    uvicorn.run("admin_api.app:app", host="127.0.0.1", port=ADMIN_PORT)


if __name__ == "__main__":
    main()
