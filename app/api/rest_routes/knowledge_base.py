import logging
from typing import Optional

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from app.models.analysis import KnowledgeBaseUploadResponse
from app.services.knowledge_base import store_knowledge_base

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Knowledge Base"])


@router.post("/upload-knowledge-base", response_model=KnowledgeBaseUploadResponse)
async def upload_knowledge_base(file: Optional[UploadFile] = File(None)):
    """
    Upload historical cultivation records as a text file.
    """
    if file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded"
        )
    try:
        filename, content = store_knowledge_base(file.file, file.filename)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Upload error: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process file",
        )
    return KnowledgeBaseUploadResponse(filename=filename, content=content)
