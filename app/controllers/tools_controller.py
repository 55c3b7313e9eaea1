"""
Tools Controller - Named tool dispatch
"""
import logging
from urllib.parse import quote
from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from app.core.errors import ClientError
from app.schemas import ToolRequest, ToolListResponse
from app.services import ToolService, get_tool_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Tools"])


def content_disposition(filename: str) -> str:
    """
    Attachment header safe for any caller-supplied filename

    ASCII fallback in a quoted-string plus the RFC 5987 UTF-8 form.
    """
    fallback = "".join(c if 32 <= ord(c) < 127 else "_" for c in filename)
    fallback = fallback.replace("\\", "\\\\").replace('"', '\\"')
    encoded = quote(filename, safe="")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{encoded}"


@router.get("/tools", response_model=ToolListResponse)
async def list_tools(service: ToolService = Depends(get_tool_service)):
    return ToolListResponse(tools=service.list_tools())


@router.post("/tools")
async def invoke_tool(
    req: ToolRequest,
    service: ToolService = Depends(get_tool_service)
):
    """
    Invoke a tool by name

    Response shape:
    - failure: 500 `{error}`
    - file produced: the raw file as an attachment
    - otherwise: the result as JSON (without `file`)
    """
    if not req.tool or req.params is None:
        raise ClientError("Missing tool or parameters")

    try:
        result = await service.invoke(req.tool, req.params)
    except ClientError:
        raise
    except Exception as e:
        logger.error(f"Tool dispatch error for {req.tool}: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Tool execution failed", "details": str(e)}
        )

    if not result.success:
        return JSONResponse(status_code=500, content={"error": result.error})

    if result.file is not None:
        return Response(
            content=result.file.as_bytes(),
            media_type=result.file.mime_type,
            headers={
                "Content-Disposition": content_disposition(result.file.filename)
            }
        )

    return result.model_dump(exclude={"file"}, exclude_none=True)
