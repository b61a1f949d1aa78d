import logging

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from .columns import ImportField
from .errors import EmptySpreadsheetError, SpreadsheetError, UnsupportedFileError
from .importer import import_file
from .matching import Rejected
from .models import CanonicalResponse, HealthResponse, ImportResponse, MatchRequest, MatchResponse
from .rows import RowProcessor
from .rules import ImportConfig
from .settings import configure_logging, settings
from .spreadsheet import SUPPORTED_EXTENSIONS

configure_logging()
logger = logging.getLogger(__name__)

config = ImportConfig.default(high_value_threshold=settings.HIGH_VALUE_THRESHOLD)
processor = RowProcessor(config)

MATCH_FIELDS = {
    "category": ImportField.CATEGORY,
    "contract": ImportField.CONTRACT,
    "contractNumber": ImportField.CONTRACT,
    "paymentMethod": ImportField.PAYMENT_METHOD,
    "bank": ImportField.BANK,
    "bankIssuer": ImportField.BANK,
}

app = FastAPI(
    title="expense-import",
    description="Spreadsheet import and normalization for expense records",
    version="0.1.0",
)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.get("/canonical", response_model=CanonicalResponse)
def canonical():
    return CanonicalResponse(
        categories=list(config.categories),
        contracts=list(config.contracts),
        payment_methods=list(config.payment_methods),
        banks=list(config.banks),
    )


@app.post("/match", response_model=MatchResponse)
def match_value(req: MatchRequest):
    import_field = MATCH_FIELDS.get(req.field)
    if import_field is None:
        raise HTTPException(
            status_code=422,
            detail=f"Unknown field {req.field!r}; expected one of {', '.join(MATCH_FIELDS)}",
        )

    result = processor.matchers[import_field].match(req.value)
    if result is None:
        return MatchResponse(field=req.field, value=req.value, status="empty")
    if isinstance(result, Rejected):
        return MatchResponse(field=req.field, value=req.value, status="rejected")
    return MatchResponse(
        field=req.field,
        value=req.value,
        status="accepted",
        canonical=result.value,
        via_alias=result.via_alias,
    )


@app.post("/import", response_model=ImportResponse)
async def import_spreadsheet(file: UploadFile = File(...)):
    filename = file.filename or ""
    if not filename.lower().endswith(SUPPORTED_EXTENSIONS):
        raise HTTPException(
            status_code=422,
            detail=f"Only {', '.join(SUPPORTED_EXTENSIONS)} files are supported",
        )

    raw = await file.read()
    if len(raw) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="File too large")

    logger.info("import requested for %s (%d bytes)", filename, len(raw))
    try:
        result = await run_in_threadpool(
            import_file, raw, filename, config, settings.FEEDBACK_LIMIT
        )
    except UnsupportedFileError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except EmptySpreadsheetError:
        raise HTTPException(
            status_code=400,
            detail="Arquivo deve conter pelo menos uma linha de cabeçalho e uma linha de dados",
        )
    except SpreadsheetError as exc:
        logger.warning("unreadable spreadsheet %s: %s", filename, exc)
        raise HTTPException(status_code=400, detail="Não foi possível ler a planilha")

    return result.to_response()
