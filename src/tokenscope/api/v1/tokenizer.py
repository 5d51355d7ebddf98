# tokenscope/api/v1/tokenizer.py

from fastapi import APIRouter
from typing import List
from tokenscope.api.dependencies import TokenizerServiceDep
from tokenscope.schemas.common import JsonResponse
from tokenscope.schemas.tokenizer_schemas import (
    DecodeRequest, EncodeRequest, ExportRead, ExportRequest, ModelRead, ResultSet
)
from tokenscope.services.tokenizer_service import TokenizerService

router = APIRouter()

@router.get("/models", response_model=JsonResponse[List[ModelRead]], summary="List Tokenizer Models")
async def list_models(service: TokenizerService = TokenizerServiceDep):
    return JsonResponse(data=service.list_models())

@router.post("/encode", response_model=JsonResponse[ResultSet], summary="Encode Text Into Tokens")
async def encode(request: EncodeRequest, service: TokenizerService = TokenizerServiceDep):
    return JsonResponse(data=service.encode(request.text, request.model))

@router.post("/decode", response_model=JsonResponse[ResultSet], summary="Decode Token IDs Into Text")
async def decode(request: DecodeRequest, service: TokenizerService = TokenizerServiceDep):
    return JsonResponse(data=service.decode(request.ids, request.model))

@router.post("/export", response_model=JsonResponse[ExportRead], summary="Build Clipboard Export Text")
async def export(request: ExportRequest, service: TokenizerService = TokenizerServiceDep):
    data = service.export(
        request.text,
        request.model,
        mode=request.mode,
        display_mode=request.display_mode,
        export_format=request.export_format,
    )
    return JsonResponse(data=data)
