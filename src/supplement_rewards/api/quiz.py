"""Quiz session endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from supplement_rewards.api.models import (
    QuizResultRequest,
    SelectAnswerRequest,
    StartQuizRequest,
)
from supplement_rewards.api.rewards import summary_payload
from supplement_rewards.config import parse_difficulty

if TYPE_CHECKING:
    from supplement_rewards.containers import AppContainer
    from supplement_rewards.services.quiz import QuizSession

router = APIRouter(prefix="/quiz", tags=["quiz"])


def session_payload(session: QuizSession, applied: bool = True) -> dict[str, object]:
    """Serialize the session state without leaking unrevealed answers."""
    question = session.current_question
    payload: dict[str, object] = {
        "applied": applied,
        "status": session.status.value,
        "index": session.index,
        "total_questions": len(session.questions),
        "progress": session.progress,
        "selected_answer": session.selected_answer,
        "revealed": session.revealed,
        "correct_count": session.correct_count,
        "incorrect_count": session.incorrect_count,
        "coins_earned": session.coins_earned,
        "question": None,
        "result": None,
    }
    if question is not None:
        payload["question"] = {
            "id": question.id,
            "question": question.question,
            "options": question.options,
            "difficulty": question.difficulty.value,
            "category": question.category,
            "correct_answer": question.correct_answer if session.revealed else None,
            "explanation": question.explanation if session.revealed else None,
        }
    result = session.result
    if result is not None:
        payload["result"] = {
            "correct": result.correct,
            "incorrect": result.incorrect,
            "coins_earned": result.coins_earned,
            "percentage": result.percentage,
            "performance_level": result.performance_level,
        }
    return payload


@router.post("/start")
async def start_quiz(body: StartQuizRequest, request: Request) -> dict[str, object]:
    """Load a new set of questions."""
    container: AppContainer = request.app.state.container
    session = container.quiz_session
    session.load_questions(parse_difficulty(body.difficulty))
    return session_payload(session)


@router.get("/session")
async def quiz_state(request: Request) -> dict[str, object]:
    """Return the current session state."""
    container: AppContainer = request.app.state.container
    return session_payload(container.quiz_session)


@router.post("/answer")
async def select_answer(
    body: SelectAnswerRequest, request: Request
) -> dict[str, object]:
    """Select an option for the current question."""
    container: AppContainer = request.app.state.container
    session = container.quiz_session
    return session_payload(session, session.select_answer(body.option))


@router.post("/reveal")
async def reveal_answer(request: Request) -> dict[str, object]:
    """Reveal and score the selected answer."""
    container: AppContainer = request.app.state.container
    session = container.quiz_session
    return session_payload(session, session.reveal_answer())


@router.post("/next")
async def next_question(request: Request) -> dict[str, object]:
    """Advance to the next question or complete the quiz."""
    container: AppContainer = request.app.state.container
    session = container.quiz_session
    return session_payload(session, session.next())


@router.post("/previous")
async def previous_question(request: Request) -> dict[str, object]:
    """Go back one question."""
    container: AppContainer = request.app.state.container
    session = container.quiz_session
    return session_payload(session, session.previous())


@router.post("/reset")
async def reset_quiz(request: Request) -> dict[str, object]:
    """Discard the session."""
    container: AppContainer = request.app.state.container
    container.quiz_session.reset()
    return session_payload(container.quiz_session)


@router.post("/results")
async def record_result(
    body: QuizResultRequest, request: Request
) -> dict[str, object]:
    """Record a quiz completed by the client and credit its coins."""
    container: AppContainer = request.app.state.container
    difficulty = parse_difficulty(body.difficulty)
    saved = container.rewards_ledger.save_quiz_result(
        total_questions=body.total_questions,
        correct_count=body.correct_count,
        incorrect_count=body.incorrect_count,
        coins_earned=body.coins_earned,
        difficulty=difficulty.value if difficulty else None,
    )
    return {
        "id": saved.record.id,
        "percentage": saved.record.percentage,
        "summary": summary_payload(saved.summary),
    }


@router.get("/history")
async def quiz_history(request: Request, limit: int = 10) -> dict[str, object]:
    """Return recent quiz attempts."""
    container: AppContainer = request.app.state.container
    history = container.rewards_ledger.quiz_history(limit)
    return {
        "history": [
            {
                "id": record.id,
                "attempt_date": record.attempt_date,
                "total_questions": record.total_questions,
                "correct_count": record.correct_count,
                "incorrect_count": record.incorrect_count,
                "coins_earned": record.coins_earned,
                "difficulty": record.difficulty,
                "percentage": record.percentage,
            }
            for record in history
        ]
    }
