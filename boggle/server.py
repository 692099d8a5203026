import logging
from itertools import islice

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from boggle.settings import settings

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("boggle")

# Populated at startup
_words: list[str] | None = None


class SolveRequest(BaseModel):
    board: list[str]
    words: list[str] | None = None


def create_app() -> FastAPI:
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        global _words

        from boggle.loader import load_words
        logger.info("Loading dictionary from %s", settings.DICTIONARY_PATH)
        try:
            _words = load_words(settings.DICTIONARY_PATH)
        except OSError as e:
            logger.warning("Could not read dictionary %s: %s", settings.DICTIONARY_PATH, e)
            _words = []

        yield

    application = FastAPI(title="Boggle Word Finder", lifespan=lifespan)

    @application.get("/health")
    async def health():
        return {
            "status": "ok",
            "dictionary_loaded": bool(_words),
            "dictionary_size": len(_words or []),
        }

    @application.post("/solve")
    async def solve(req: SolveRequest):
        from boggle.board import Board, BoardError
        from boggle.histogram import build_histogram
        from boggle.metrics import StageTimer
        from boggle.solver import solve as solve_board
        from boggle.trie import TrieBuildError, build_trie

        words = req.words if req.words is not None else (_words or [])
        timer = StageTimer()

        with timer.stage("board"):
            try:
                board = Board(req.board)
            except BoardError as e:
                raise HTTPException(400, f"Malformed board: {e}")

        logger.info("Board %dx%d: %s", board.size, board.size, " / ".join(board.rows()))

        with timer.stage("histogram"):
            histogram = build_histogram(board)

        logger.info("Board histogram: %s", histogram.as_dict())

        with timer.stage("trie"):
            try:
                trie = build_trie(words, board.cell_count, histogram)
            except TrieBuildError as e:
                logger.error("Trie build failed: %s", e)
                raise HTTPException(500, "Dictionary could not be built")
        timer.record_trie(trie)

        limit = settings.MAX_RESULTS if settings.MAX_RESULTS > 0 else None
        with trie, timer.stage("solve"):
            findings = list(islice(solve_board(board, trie), limit))
        timer.record_findings(len(findings))

        logger.info("Solve summary: %s", timer.report())

        result = {
            "board_size": board.size,
            "board": board.rows(),
            "accepted_words": trie.accepted_count,
            "findings": [
                {"word": f.word, "row": f.row, "col": f.col, "path": [list(p) for p in f.path]}
                for f in findings
            ],
            "finding_count": len(findings),
            "processing_time": timer.total_ms,
            "stage_timings": timer.summary(),
        }

        if settings.DEBUG:
            _save_debug_result(result)

        return JSONResponse(result)

    @application.get("/api/settings")
    async def api_get_settings():
        from boggle.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from boggle.settings import update_settings, get_editable_settings
        body = await request.json()
        errors = update_settings(settings, **body)
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


def _save_debug_result(result: dict):
    import json
    from datetime import datetime

    debug_dir = settings.BASE_DIR / "debug"
    debug_dir.mkdir(exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

    with open(debug_dir / f"{ts}_result.json", "w") as f:
        json.dump({"timestamp": ts, **result}, f, indent=2)

    logger.info("Saved debug result to debug/%s_result.json", ts)


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
