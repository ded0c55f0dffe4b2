"""Game template CRUD endpoints."""

from fastapi import APIRouter, HTTPException

from tally import storage

from .models import CreateTemplate, UpdateTemplate

router = APIRouter()


@router.get("/templates")
async def list_templates():
    """List all game templates (presets merged with user-created)."""
    return storage.list_templates()


@router.post("/templates", status_code=201)
async def create_template(body: CreateTemplate):
    """Create a new game template."""
    fields = body.model_dump(exclude={"name"})
    try:
        return storage.create_template(body.name, fields)
    except FileExistsError as e:
        raise HTTPException(409, str(e))
    except ValueError as e:
        raise HTTPException(400, str(e))


@router.get("/templates/{slug}")
async def get_template(slug: str):
    """Get a single game template by slug."""
    template = storage.get_template(slug)
    if not template:
        raise HTTPException(404, "Template not found")
    return template


@router.patch("/templates/{slug}")
async def update_template(slug: str, body: UpdateTemplate):
    """Update template fields; presets are copied to user data first."""
    fields = body.model_dump(exclude_none=True)
    try:
        updated = storage.update_template(slug, fields)
    except FileExistsError as e:
        raise HTTPException(409, str(e))
    except ValueError as e:
        raise HTTPException(400, str(e))
    if not updated:
        raise HTTPException(404, "Template not found")
    return updated


@router.delete("/templates/{slug}")
async def delete_template(slug: str):
    """Delete a template (or remove user override to reveal preset)."""
    if not storage.delete_template(slug):
        raise HTTPException(404, "Template not found")
    return {"ok": True}
