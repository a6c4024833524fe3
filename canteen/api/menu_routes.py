from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.auth.dependencies import get_current_admin_user
from canteen.core.errors import ValidationError
from canteen.crud import menu as menu_crud
from canteen.db import get_db
from canteen.schemas.menu import ActiveMenuResponse, MenuUploadResponse
from canteen.services.publication import publish_menu
from canteen.services.spreadsheet import parse_menu_upload

router = APIRouter(prefix="/menu", tags=["Menu"])

MAX_UPLOAD_SIZE = 5 * 1024 * 1024  # 5MB


@router.get("/active", response_model=ActiveMenuResponse)
async def active_menu(db: AsyncSession = Depends(get_db)):
    return ActiveMenuResponse(menu=await menu_crud.get_active_menu(db))


@router.post("/upload", response_model=MenuUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_menu(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_admin_user),
):
    """Replace the weekly menu from an uploaded .xlsx or .csv sheet"""
    content = await file.read(MAX_UPLOAD_SIZE + 1)
    if len(content) > MAX_UPLOAD_SIZE:
        raise ValidationError("File too large (5MB max).", field="file")

    rows = parse_menu_upload(file.filename, content)
    items = await publish_menu(db, rows)
    return MenuUploadResponse(
        message=f"Successfully uploaded and updated menu with {len(items)} items.",
        item_count=len(items),
        version=items[0].version,
    )
