from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import FileResponse

from ..config import Settings
from ..database import Storage
from ..dependencies import get_app_settings, get_current_user, get_storage, read_upload
from ..models.vision_board import VisionBoardModel
from ..schemas import (
    Message, User, VisionBoard, VisionBoardCreate, VisionBoardUpdate, VisionImage,
    VisionImageUpdate,
)

router = APIRouter(prefix="/vision-boards", tags=["vision-boards"])


def get_boards(storage: Storage = Depends(get_storage)) -> VisionBoardModel:
    return VisionBoardModel(storage)


@router.get("", response_model=List[VisionBoard])
async def get_all_vision_boards(
    current_user: User = Depends(get_current_user),
    boards: VisionBoardModel = Depends(get_boards),
):
    return await boards.get_all(current_user.id)


@router.get("/year/{year}/month/{month}", response_model=VisionBoard)
async def get_vision_board_by_month(
    year: int,
    month: int,
    current_user: User = Depends(get_current_user),
    boards: VisionBoardModel = Depends(get_boards),
):
    board = await boards.get_by_year_and_month(year, month, current_user.id)
    if not board:
        raise HTTPException(status_code=404, detail="Vision board not found")
    return board


@router.get("/images/{image_id}")
async def get_image(image_id: str, boards: VisionBoardModel = Depends(get_boards)):
    """Serve an image file. Public so <img> tags can load it by its unguessable id."""
    path = await boards.get_image_path(image_id)
    if not path or not path.is_file():
        raise HTTPException(status_code=404, detail="Image not found")
    return FileResponse(
        path,
        headers={
            "Access-Control-Allow-Origin": "*",
            "Cross-Origin-Resource-Policy": "cross-origin",
        },
    )


@router.get("/{board_id}", response_model=VisionBoard)
async def get_vision_board(
    board_id: str,
    current_user: User = Depends(get_current_user),
    boards: VisionBoardModel = Depends(get_boards),
):
    board = await boards.get_by_id(board_id, current_user.id)
    if not board:
        raise HTTPException(status_code=404, detail="Vision board not found")
    return board


@router.post("", response_model=VisionBoard, status_code=201)
async def create_vision_board(
    board: VisionBoardCreate,
    current_user: User = Depends(get_current_user),
    boards: VisionBoardModel = Depends(get_boards),
):
    return await boards.create(board, current_user.id)


@router.put("/{board_id}", response_model=VisionBoard)
async def update_vision_board(
    board_id: str,
    data: VisionBoardUpdate,
    current_user: User = Depends(get_current_user),
    boards: VisionBoardModel = Depends(get_boards),
):
    board = await boards.update(board_id, data, current_user.id)
    if not board:
        raise HTTPException(status_code=404, detail="Vision board not found")
    return board


@router.delete("/{board_id}", response_model=Message)
async def delete_vision_board(
    board_id: str,
    current_user: User = Depends(get_current_user),
    boards: VisionBoardModel = Depends(get_boards),
):
    if not await boards.delete(board_id, current_user.id):
        raise HTTPException(status_code=404, detail="Vision board not found")
    return {"message": "Vision board deleted successfully"}


@router.post("/{board_id}/images", response_model=VisionImage, status_code=201)
async def add_image(
    board_id: str,
    image: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings),
    boards: VisionBoardModel = Depends(get_boards),
):
    upload = await read_upload(image, "image/", settings.MAX_IMAGE_SIZE, "image")
    if upload is None:
        raise HTTPException(status_code=400, detail="No image file provided")
    new_image = await boards.add_image(board_id, current_user.id, upload)
    if not new_image:
        raise HTTPException(status_code=404, detail="Vision board not found")
    return new_image


@router.put("/{board_id}/images/{image_id}", response_model=VisionImage)
async def update_image(
    board_id: str,
    image_id: str,
    data: VisionImageUpdate,
    current_user: User = Depends(get_current_user),
    boards: VisionBoardModel = Depends(get_boards),
):
    image = await boards.update_image(board_id, image_id, data, current_user.id)
    if not image:
        raise HTTPException(status_code=404, detail="Vision board or image not found")
    return image


@router.delete("/{board_id}/images/{image_id}", response_model=Message)
async def delete_image(
    board_id: str,
    image_id: str,
    current_user: User = Depends(get_current_user),
    boards: VisionBoardModel = Depends(get_boards),
):
    if not await boards.delete_image(board_id, image_id, current_user.id):
        raise HTTPException(status_code=404, detail="Vision board or image not found")
    return {"message": "Image deleted successfully"}
