from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from quizcms.models.media import Album, Art, Book, Film, MediaItem
from quizcms.schemas.content import CollectionKind, MediaRef

MEDIA_MODELS: dict[CollectionKind, type[MediaItem]] = {
    CollectionKind.ART: Art,
    CollectionKind.FILMS: Film,
    CollectionKind.ALBUMS: Album,
    CollectionKind.BOOKS: Book,
}


async def get_media_item(session: AsyncSession, ref: MediaRef) -> MediaItem | None:
    """Get the media item a reference points to (with its cover image)"""
    model = MEDIA_MODELS[ref.kind]
    result = await session.execute(
        select(model).where(model.id == ref.id).options(selectinload(model.cover_image))
    )
    return result.scalar_one_or_none()


async def get_all_media_items(session: AsyncSession, kind: CollectionKind) -> Sequence[MediaItem]:
    """All items of one collection, by id"""
    model = MEDIA_MODELS[kind]
    result = await session.execute(select(model).order_by(model.id))
    return result.scalars().all()
