import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from starlette.concurrency import run_in_threadpool

from cv_analyzer.api.dependencies import get_cv_parser
from cv_analyzer.config import settings
from cv_analyzer.core.cv_parser import CvParser
from cv_analyzer.core.errors import PdfExtractionError
from cv_analyzer.core.pdf_extractor import extract_pdf_text
from cv_analyzer.core.schemas import UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["parse"])


@router.post(
    "/upload-pdf",
    response_model=UploadResponse,
    summary="Upload and Parse CV",
    description="Extract name, email, phone, skills, experience and education from a PDF resume.",
    responses={
        200: {
            "description": "Successfully parsed resume",
            "content": {
                "application/json": {
                    "example": {
                        "parsedData": {
                            "name": "JOHN SMITH",
                            "email": "john@example.com",
                            "phone": "+1 (555) 123-4567",
                            "skills": ["JavaScript", "React", "Python"],
                            "experience": "Jan 2022 - Present Acme\nBuilt internal tools",
                            "education": "MIT\n2016-2020 Computer Science",
                            "rawText": "JOHN SMITH\njohn@example.com\n...",
                        }
                    }
                }
            },
        },
        400: {"description": "No PDF file uploaded"},
        413: {"description": "File too large"},
        415: {"description": "Not a PDF"},
        422: {"description": "PDF could not be read or has no extractable text"},
    },
)
async def upload_pdf(
    pdf: Optional[UploadFile] = File(None, description="Resume PDF"),
    parser: CvParser = Depends(get_cv_parser),
):
    """
    Parse a PDF resume.

    **Returns:**
    - **parsedData**: extracted fields plus the full extracted text (`rawText`).
      Fields no heuristic could find are `null`; `skills` is always a list.
    """
    if pdf is None:
        raise HTTPException(status_code=400, detail="No PDF file uploaded.")

    filename = (pdf.filename or "").lower()
    content_type = (pdf.content_type or "").lower()
    if not (filename.endswith(".pdf") or content_type == "application/pdf"):
        raise HTTPException(status_code=415, detail=f"Only PDF files are supported, got: {pdf.content_type}")

    raw = await pdf.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")
    if len(raw) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail=f"File exceeds {settings.max_upload_bytes} bytes.")

    logger.info(f"File received: {pdf.filename}, size: {len(raw)} bytes, mimetype: {pdf.content_type}")

    try:
        text = await run_in_threadpool(extract_pdf_text, raw)
    except PdfExtractionError as e:
        logger.warning(f"Error parsing PDF {pdf.filename}: {e}")
        raise HTTPException(status_code=422, detail=f"Error parsing PDF: {e}")

    if not text.strip():
        raise HTTPException(
            status_code=422,
            detail="PDF appears to have no extractable text. OCR is not supported.",
        )
    logger.debug(f"Extracted text (first 500 chars): {text[:500]!r}")

    parsed = await run_in_threadpool(parser.parse, text)
    return UploadResponse(parsed_data=parsed)
