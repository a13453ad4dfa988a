# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Default exception mapper for HTTP exceptions raised by application code."""

from __future__ import annotations

from starlette.exceptions import HTTPException
from starlette.responses import PlainTextResponse, Response

from restweaver.providers.base import ExceptionMapper


class HTTPExceptionMapper(ExceptionMapper[HTTPException]):
    """Turns an `HTTPException` into a plain-text response with its status and headers."""

    def to_response(self, exception: HTTPException) -> Response:
        return PlainTextResponse(
            content=str(exception.detail),
            status_code=exception.status_code,
            headers=dict(exception.headers or {}),
        )


__all__ = ("HTTPExceptionMapper",)
