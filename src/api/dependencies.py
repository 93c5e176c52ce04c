from fastapi import Depends, Header, HTTPException

from config import settings
from core.rate_limiter import write_limiter


async def verify_gateway_secret(
    x_gateway_secret: str = Header(...),
) -> None:
    if x_gateway_secret != settings.GATEWAY_SECRET:
        raise HTTPException(status_code=401, detail="Invalid gateway secret")


async def current_user_id(
    x_user_id: int = Header(..., gt=0),
) -> int:
    # The gateway has already validated the user's token
    return x_user_id


async def limit_writes(user_id: int = Depends(current_user_id)) -> None:
    if not write_limiter.is_allowed(str(user_id)):
        raise HTTPException(status_code=429, detail="Rate limit exceeded")
