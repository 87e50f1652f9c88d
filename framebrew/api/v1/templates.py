"""Template endpoints."""

from fastapi import APIRouter, Depends, Response, status

from framebrew.api.deps import get_org_id, get_template_service
from framebrew.schemas.template import TemplateCreate, TemplateRead
from framebrew.services.templates import TemplateService

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=list[TemplateRead])
async def list_templates(
    org_id: str = Depends(get_org_id),
    templates: TemplateService = Depends(get_template_service),
) -> list[TemplateRead]:
    return await templates.list_templates(org_id)


@router.post("", response_model=TemplateRead, status_code=status.HTTP_201_CREATED)
async def create_template(
    data: TemplateCreate,
    org_id: str = Depends(get_org_id),
    templates: TemplateService = Depends(get_template_service),
) -> TemplateRead:
    return await templates.create_template(org_id, data)


@router.put("/{template_id}", response_model=TemplateRead)
async def replace_template(
    template_id: str,
    data: TemplateCreate,
    org_id: str = Depends(get_org_id),
    templates: TemplateService = Depends(get_template_service),
) -> TemplateRead:
    return await templates.replace_template(org_id, template_id, data)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: str,
    org_id: str = Depends(get_org_id),
    templates: TemplateService = Depends(get_template_service),
) -> Response:
    await templates.delete_template(org_id, template_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
