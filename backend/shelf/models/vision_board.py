"""Vision boards: one canvas per (user, year, month) owning an ordered list of images.

Images are embedded in the board record and carry free position, size,
rotation and stacking order. Nothing here resolves overlaps, clamps
coordinates or compacts ``zIndex``; the client draws in whatever order the
values give.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from ..database import UploadedFile
from ..schemas import Position, Size, VisionBoard, VisionImage, utc_now
from .base import OwnedRecordModel, index_of, merge, new_id

logger = logging.getLogger(__name__)

DEFAULT_POSITION = (100, 100)
DEFAULT_SIZE = (200, 200)


def find_image(board: VisionBoard, image_id: str) -> Optional[int]:
    for i, image in enumerate(board.images):
        if image.id == image_id:
            return i
    return None


class VisionBoardModel(OwnedRecordModel[VisionBoard]):
    record_type = VisionBoard
    store_name = "vision_boards"
    label = "vision board"

    @property
    def files(self):
        return self.storage.vision_images

    async def get_by_year_and_month(
        self, year: int, month: int, user_id: str
    ) -> Optional[VisionBoard]:
        for board in await self.get_all(user_id):
            if board.year == year and board.month == month:
                return board
        return None

    async def on_delete(self, record: VisionBoard) -> None:
        for image in record.images:
            await self.files.delete_file(image.file_name)

    async def add_image(
        self, board_id: str, user_id: str, upload: UploadedFile
    ) -> Optional[VisionImage]:
        """Store an upload and append it to the board on top of the stack.

        The new image's ``zIndex`` is the board's current image count. Returns
        None without writing anything when the board does not exist.
        """
        file_name = None
        try:
            async with self.store.transaction() as boards:
                index = index_of(boards, board_id, user_id)
                if index is None:
                    return None
                board = boards[index]

                image_id = new_id()
                file_name = await self.files.save(
                    image_id, upload.content, upload.filename, keep_name=True
                )
                now = utc_now()
                image = VisionImage(
                    id=image_id,
                    vision_board_id=board.id,
                    file_name=file_name,
                    file_path=str(self.files.path_of(file_name)),
                    position=Position(x=DEFAULT_POSITION[0], y=DEFAULT_POSITION[1]),
                    size=Size(width=DEFAULT_SIZE[0], height=DEFAULT_SIZE[1]),
                    rotation=0,
                    z_index=len(board.images),
                    created_at=now,
                    updated_at=now,
                )
                board.images.append(image)
                board.updated_at = now
        except Exception:
            if file_name:
                await self.files.delete_file(file_name)
            raise

        logger.info(f"Added image {image.id} to vision board {board_id}")
        return image

    async def update_image(
        self,
        board_id: str,
        image_id: str,
        data: Union[BaseModel, Dict[str, Any]],
        user_id: str,
    ) -> Optional[VisionImage]:
        if isinstance(data, BaseModel):
            patch = data.model_dump(exclude_unset=True, exclude_none=True)
        else:
            patch = {k: v for k, v in data.items() if v is not None}

        async with self.store.transaction() as boards:
            index = index_of(boards, board_id, user_id)
            if index is None:
                return None
            board = boards[index]
            position = find_image(board, image_id)
            if position is None:
                return None

            image = merge(board.images[position], patch)
            board.images[position] = image
            board.updated_at = image.updated_at

        return image

    async def delete_image(self, board_id: str, image_id: str, user_id: str) -> bool:
        async with self.store.transaction() as boards:
            index = index_of(boards, board_id, user_id)
            if index is None:
                return False
            board = boards[index]
            position = find_image(board, image_id)
            if position is None:
                return False
            removed = board.images.pop(position)
            board.updated_at = utc_now()

        await self.files.delete_file(removed.file_name)
        logger.info(f"Deleted image {image_id} from vision board {board_id}")
        return True

    async def get_image_path(self, image_id: str) -> Optional[Path]:
        """Resolve a global image id to its file by scanning every board."""
        boards: List[VisionBoard] = await self.store.load()
        for board in boards:
            position = find_image(board, image_id)
            if position is not None:
                return self.files.path_of(board.images[position].file_name)
        return None
