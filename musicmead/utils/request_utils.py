from fastapi import HTTPException, Request
from typing import Any


async def read_json_body(request: Request) -> Any:
    """Decode the request body, turning malformed JSON or bad UTF-8 into a 400"""
    try:
        return await request.json()
    except ValueError:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise HTTPException(status_code=400, detail="Invalid JSON body")
