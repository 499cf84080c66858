"""
Grant business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_grant_response(row: dict) -> schemas.GrantResponse:
    return schemas.GrantResponse(
        grant_id=int(row["grant_id"]),
        user_id=str(row["user_id"]),
        procurement_id=int(row["procurement_id"]),
        count=int(row["count"]),
        club_id=int(row["club_id"]),
    )


async def list_grants() -> list[schemas.GrantResponse]:
    return [_to_grant_response(row) for row in await repository.list_grants()]


async def create_grant(payload: schemas.CreateGrantRequest) -> schemas.GrantResponse:
    try:
        row = await repository.create_grant_and_decrement_stock(
            user_id=payload.user_id,
            procurement_id=payload.procurement_id,
            count=payload.count,
            club_id=payload.club_id,
        )
    except repository.ItemNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Procurement item not found",
        ) from exc
    except repository.InsufficientStockError as exc:
        logger.info(
            "grant_rejected procurement_id=%s available=%s requested=%s",
            exc.procurement_id,
            exc.available,
            exc.requested,
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Insufficient count",
        ) from exc

    grant = _to_grant_response(row)
    logger.info(
        "grant_created grant_id=%s procurement_id=%s club_id=%s count=%s",
        grant.grant_id,
        grant.procurement_id,
        grant.club_id,
        grant.count,
    )
    return grant
