"""FastAPI server that exposes the running exam as JSON endpoints."""

from __future__ import annotations

from threading import Thread
from typing import Literal

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel
import uvicorn

from exam_app.constants.about import APP_NAME, APP_VERSION
from exam_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from exam_app.core.exam_manager import ExamManager
from exam_app.core.markdown_math_renderer import renderer
from exam_app.core.models import GradeReport, QuestionView, TimerTick


class AnswerPayload(BaseModel):
    """Payload schema for recording the selection of a question."""

    question_id: int | str
    selected_indices: list[int]


class NavigatePayload(BaseModel):
    """Payload schema for moving to the previous or next question."""

    delta: Literal[-1, 1]
    pending_selection: list[int] | None = None


class SubmitPayload(BaseModel):
    """Payload schema for submitting the exam."""

    pending_selection: list[int] | None = None


def _get_exam_manager_dependency(exam_manager: ExamManager):
    def dependency() -> ExamManager:
        return exam_manager

    return dependency


def _serialize_time(tick: TimerTick) -> dict[str, object]:
    return {
        "remaining_seconds": tick.remaining,
        "formatted": tick.formatted,
        "warn": tick.warn,
        "urgent": tick.urgent,
        "expired": tick.expired,
    }


def _serialize_view(view: QuestionView) -> dict[str, object]:
    question = view.question
    return {
        "question_id": question.id,
        "question_html": renderer.render_fragment(question.prompt),
        "options": list(question.options),
        "type": question.kind.value,
        "selected_indices": sorted(view.selection),
        "position": view.position,
        "total": view.total,
        "progress": view.progress,
        "answered_count": view.answered_count,
        "is_first": view.is_first,
        "is_last": view.is_last,
    }


def _serialize_report(report: GradeReport) -> dict[str, object]:
    return {
        "score": report.score,
        "total": report.total,
        "percentage": report.percentage,
        "time_remaining_seconds": report.time_remaining,
        "entries": [
            {
                "question_id": entry.question.id,
                "question": entry.question.prompt,
                "correct": entry.correct,
                "selected_indices": sorted(entry.selected),
                "answer_indices": sorted(entry.answer),
                "selection_summary": entry.selection_summary,
                "options": [
                    {
                        "text": option.text,
                        "is_answer": option.is_answer,
                        "is_selected": option.is_selected,
                        "correct": option.correct,
                        "wrong": option.wrong,
                        "user_selected": option.user_selected,
                    }
                    for option in entry.options
                ],
            }
            for entry in report.entries
        ],
    }


def _require_exam(manager: ExamManager) -> None:
    if not manager.has_exam():
        raise HTTPException(status_code=409, detail="No exam is running.")


def create_api_app(exam_manager: ExamManager) -> FastAPI:
    """Create a FastAPI application wired to the provided exam manager."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    exam_manager_dep = _get_exam_manager_dependency(exam_manager)

    @app.get("/exam")
    def get_exam(manager: ExamManager = Depends(exam_manager_dep)) -> dict[str, object]:
        _require_exam(manager)
        submitted = manager.is_submitted()
        return {
            "status": "submitted" if submitted else "in_progress",
            "timer_running": manager.is_timer_running(),
            "time": _serialize_time(manager.time_snapshot()),
            "current": _serialize_view(manager.current_view()),
        }

    @app.post("/answer")
    def record_answer(
        payload: AnswerPayload,
        manager: ExamManager = Depends(exam_manager_dep),
    ) -> dict[str, object]:
        _require_exam(manager)
        try:
            recorded = manager.record_answer(payload.question_id, payload.selected_indices)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc.args[0])) from exc
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return {"recorded": recorded}

    @app.post("/navigate")
    def navigate(
        payload: NavigatePayload,
        manager: ExamManager = Depends(exam_manager_dep),
    ) -> dict[str, object]:
        _require_exam(manager)
        try:
            view = manager.go_to(payload.delta, payload.pending_selection)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _serialize_view(view)

    @app.post("/submit")
    def submit(
        payload: SubmitPayload,
        manager: ExamManager = Depends(exam_manager_dep),
    ) -> dict[str, object]:
        _require_exam(manager)
        try:
            report = manager.submit(payload.pending_selection)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _serialize_report(report)

    @app.get("/review")
    def get_review(manager: ExamManager = Depends(exam_manager_dep)) -> dict[str, object]:
        _require_exam(manager)
        report = manager.get_report()
        if report is None:
            raise HTTPException(status_code=409, detail="The exam has not been submitted yet.")
        return _serialize_report(report)

    @app.post("/pause")
    def pause(manager: ExamManager = Depends(exam_manager_dep)) -> dict[str, object]:
        _require_exam(manager)
        manager.pause_timer()
        return {"timer_running": manager.is_timer_running(), "time": _serialize_time(manager.time_snapshot())}

    @app.post("/resume")
    def resume(manager: ExamManager = Depends(exam_manager_dep)) -> dict[str, object]:
        _require_exam(manager)
        manager.resume_timer()
        return {"timer_running": manager.is_timer_running(), "time": _serialize_time(manager.time_snapshot())}

    @app.post("/restart", status_code=201)
    def restart(manager: ExamManager = Depends(exam_manager_dep)) -> dict[str, object]:
        try:
            view = manager.restart_exam()
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _serialize_view(view)

    return app


def _build_server(exam_manager: ExamManager, host: str, port: int) -> uvicorn.Server:
    app = create_api_app(exam_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    return uvicorn.Server(config)


def start_api_server(
    exam_manager: ExamManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    server = _build_server(exam_manager, host, port)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="ExamApiServer", daemon=True)
    thread.start()
    return thread


def run_api_server(
    exam_manager: ExamManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> None:
    """Serve the API in the calling thread until interrupted."""
    _build_server(exam_manager, host, port).run()
