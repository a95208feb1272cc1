from fastapi import FastAPI, UploadFile, File, HTTPException, Form, Depends
from fastapi.responses import Response
from fastapi.middleware.cors import CORSMiddleware
from . import cipher_engine
from .config import CORS_ORIGINS, HISTORY_LIMIT, LOG_LEVEL, MAX_CONCURRENT_FILE_OPS, MAX_UPLOAD_MB, THREAD_WORKERS
from .errors import CipherError
from .history import OperationHistory
from .keygen import KeyGenerator
from .schemas import (
    Algorithm, AlgorithmInfo, CipherRequest, CipherResult, HistoryEntry,
    Mode, RandomKeyResponse, TransformRequest,
)
from typing import List, Optional
import logging
import asyncio
import traceback
from concurrent.futures import ThreadPoolExecutor

__version__ = "1.0.0"

# Configure logging
logger = logging.getLogger("uvicorn")
logger.setLevel(LOG_LEVEL)

app = FastAPI(title="Classical Cipher Service", version=__version__)

# Global resources for file operations
file_processing_semaphore = asyncio.Semaphore(MAX_CONCURRENT_FILE_OPS)
thread_pool = ThreadPoolExecutor(max_workers=THREAD_WORKERS)

# Caller-owned state: the engine itself keeps none
operation_history = OperationHistory(HISTORY_LIMIT)
key_generator = KeyGenerator()

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"]
)


def get_history() -> OperationHistory:
    return operation_history


def get_key_generator() -> KeyGenerator:
    return key_generator


# --- Helper Functions ---

async def _read_upload_file_limited(file: UploadFile, limit_mb: int = MAX_UPLOAD_MB):
    contents = await file.read()
    if len(contents) > limit_mb * 1024 * 1024:
        raise HTTPException(status_code=413, detail=f"File too large. Maximum size is {limit_mb}MB.")
    return contents


def _cipher_http_error(e: CipherError) -> HTTPException:
    return HTTPException(status_code=400, detail=e.to_dict())


def _attachment(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@app.get("/")
def read_root():
    return {
        "name": "classical-cipher-service",
        "version": __version__,
        "algorithms": [a.value for a in Algorithm],
    }


@app.get("/algorithms", response_model=List[AlgorithmInfo])
def list_algorithms():
    return cipher_engine.available_algorithms()


@app.post("/process", response_model=CipherResult)
def process(req: CipherRequest, history: OperationHistory = Depends(get_history)):
    result = cipher_engine.run(req)
    if result.ok:
        history.record(req.algorithm.value, req.mode.value, req.text, result.output)
    return result


def _transform(req: TransformRequest, mode: Mode, history: OperationHistory):
    try:
        output = cipher_engine.transform(req.algorithm, mode, req.text, req.key)
    except CipherError as e:
        logger.warning(f"{req.algorithm.value} {mode.value} rejected: {e.kind.value}")
        raise _cipher_http_error(e)
    history.record(req.algorithm.value, mode.value, req.text, output)
    return {"output": output}


@app.post("/encode")
def encode_text(req: TransformRequest, history: OperationHistory = Depends(get_history)):
    return _transform(req, Mode.ENCODE, history)


@app.post("/decode")
def decode_text(req: TransformRequest, history: OperationHistory = Depends(get_history)):
    return _transform(req, Mode.DECODE, history)


@app.post("/process-file")
async def process_file(
    file: UploadFile = File(...),
    algorithm: Algorithm = Form(...),
    mode: Mode = Form(...),
    key: str = Form(...),
    history: OperationHistory = Depends(get_history),
):
    async with file_processing_semaphore:
        try:
            logger.info(f"Processing file {file.filename} ({algorithm.value} {mode.value})")
            raw = await _read_upload_file_limited(file)
            try:
                text = raw.decode("utf-8")
            except UnicodeDecodeError:
                raise HTTPException(status_code=400, detail="File must be UTF-8 encoded text.")

            output = await asyncio.get_event_loop().run_in_executor(
                thread_pool,
                cipher_engine.transform,
                algorithm, mode, text, key
            )
            history.record(algorithm.value, mode.value, text, output)
            logger.info(f"File processed: {len(text)} -> {len(output)} chars")
            return _attachment(output, f"{algorithm.value}-{mode.value}-output.txt")

        except CipherError as e:
            logger.warning(f"File {algorithm.value} {mode.value} rejected: {e.kind.value}")
            raise _cipher_http_error(e)
        except HTTPException:
            raise
        except Exception as e:
            error_detail = f"{str(e)}\n{traceback.format_exc()}"
            logger.error(f"FATAL ERROR in process_file: {error_detail}")
            raise HTTPException(status_code=500, detail=str(e))


@app.get("/random-key/{algorithm}", response_model=RandomKeyResponse)
def random_key(
    algorithm: Algorithm,
    length: Optional[int] = None,
    include_numbers: bool = False,
    include_symbols: bool = False,
    generator: KeyGenerator = Depends(get_key_generator),
):
    try:
        key = generator.generate(algorithm, length, include_numbers, include_symbols)
    except CipherError as e:
        raise _cipher_http_error(e)
    return {"algorithm": algorithm, "key": key}


@app.get("/history", response_model=List[HistoryEntry])
def get_history_entries(history: OperationHistory = Depends(get_history)):
    return history.entries()


@app.delete("/history")
def clear_history(history: OperationHistory = Depends(get_history)):
    return {"cleared": history.clear()}


@app.get("/history/export")
def export_history(history: OperationHistory = Depends(get_history)):
    return _attachment(history.export_text(), "encryption_history.txt")


@app.get("/history/export-excel")
def export_history_excel(history: OperationHistory = Depends(get_history)):
    headers = {
        'Content-Disposition': 'attachment; filename="encryption_history.xlsx"'
    }
    return Response(
        content=history.export_excel(),
        headers=headers,
        media_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    )
