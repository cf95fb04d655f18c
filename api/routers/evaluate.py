"""
Router: POST /evaluate
Tekst → wartość, głębokość, rendering (opcjonalnie kroki obliczeń).
Błędy leksykalne i składniowe obsługuje globalny handler w api/main.py (422).
"""
from fastapi import APIRouter, Depends

from api.dependencies import get_pipeline
from api.schemas import ErrorResponse, EvaluateRequest, EvaluateResponse, json_number

router = APIRouter(prefix="/evaluate", tags=["evaluate"])


@router.post("", response_model=EvaluateResponse, responses={422: {"model": ErrorResponse}})
def evaluate(body: EvaluateRequest, pipeline=Depends(get_pipeline)) -> EvaluateResponse:
    result = pipeline.run(body.text)
    return EvaluateResponse(
        value=json_number(result.value),
        depth=result.depth,
        rendered=result.rendered,
        steps=result.steps if body.steps else [],
    )
