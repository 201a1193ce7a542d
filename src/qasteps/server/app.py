from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException

from ..config import Settings
from ..errors import KeywordTableError
from ..logging import setup_logging
from ..parser import StepParser, lint_actions
from ..types import KeywordTable
from .schemas import LintResponse, ParseRequest, ParseResponse

app = FastAPI(title="QA Step Parser API")


def get_settings() -> Settings:
    settings = Settings.from_env()
    settings.ensure_directories()
    setup_logging(settings.log_level, settings.log_dir / "qasteps.log")
    return settings


def build_parser(request: ParseRequest, settings: Settings) -> StepParser:
    try:
        if request.keywords is not None:
            table = KeywordTable.from_mapping(request.keywords)
        else:
            table = settings.keyword_table()
    except KeywordTableError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return StepParser(table=table, workers=request.workers or settings.parse_workers)


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/parse", response_model=ParseResponse)
async def parse_endpoint(request: ParseRequest, settings: Settings = Depends(get_settings)) -> ParseResponse:
    parser = build_parser(request, settings)
    actions = parser.parse(request.text)
    return ParseResponse(actions=[action.to_dict() for action in actions])


@app.post("/lint", response_model=LintResponse)
async def lint_endpoint(request: ParseRequest, settings: Settings = Depends(get_settings)) -> LintResponse:
    parser = build_parser(request, settings)
    return LintResponse(problems=lint_actions(parser.parse(request.text)))
