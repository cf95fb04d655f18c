"""
Router: POST /tokenize
Zwraca sekwencję tokenów (bez sentinela END).
"""
from fastapi import APIRouter, Depends

from adapters.lexer.scanner_lexer import describe_tokens
from api.dependencies import get_pipeline
from api.schemas import ErrorResponse, TokenizeRequest, TokenizeResponse, TokenOut

router = APIRouter(prefix="/tokenize", tags=["tokenize"])


@router.post("", response_model=TokenizeResponse, responses={422: {"model": ErrorResponse}})
def tokenize(body: TokenizeRequest, pipeline=Depends(get_pipeline)) -> TokenizeResponse:
    tokens = pipeline.tokenize(body.text)
    return TokenizeResponse(
        tokens=[TokenOut.from_token(tok) for tok in tokens],
        labels=describe_tokens(tokens),
    )
