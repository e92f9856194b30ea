#!/usr/bin/env python
"""
Interview Prep - Terminal Front End

Runs an interview practice session against the coaching API:
    interview-prep                     # practice in the terminal
    interview-prep serve               # start the API server
    uvicorn interview_prep.api.main:app --reload
"""

import argparse
import sys
from typing import List, Optional

from interview_prep.config import CLIENT_CONFIG, SERVER_CONFIG
from interview_prep.resume import load_resume
from interview_prep.roles import Role
from interview_prep.session import (
    CoachClient,
    RewriteMode,
    SessionController,
    SessionStatus,
    SessionStore,
)

SCORE_BADGES = {
    "strong": "🟢 Strong",
    "good": "🟡 Good",
    "needs-work": "🔴 Needs work",
}

COMMANDS = """
Commands:
  a  answer the current question       n  next question
  r  regenerate feedback               p  previous question
  s  shorten improved answer           m  add metrics to improved answer
  x  reset session                     q  quit
"""


def _alert(message: str) -> None:
    print(f"\n⚠️  {message}")


def _confirm(prompt: str) -> bool:
    return input(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")


def _read_multiline(prompt: str) -> str:
    print(f"{prompt} (finish with an empty line)")
    lines = []
    while True:
        line = input()
        if not line.strip():
            break
        lines.append(line)
    return "\n".join(lines)


def _choose_role() -> Role:
    roles = list(Role)
    print("\nChoose your role:")
    for i, role in enumerate(roles, 1):
        print(f"  {i}. {role.label}")
    while True:
        choice = input("Role number: ").strip()
        if choice.isdigit() and 1 <= int(choice) <= len(roles):
            return roles[int(choice) - 1]
        print("Please pick one of the listed numbers.")


def collect_context(controller: SessionController, resume_file: Optional[str] = None) -> None:
    """Fill in role, background and job description."""
    state = controller.state
    role = state.role or _choose_role()

    resume = state.resume
    if resume_file:
        try:
            resume = load_resume(resume_file)
        except (ValueError, OSError) as e:
            _alert(str(e))
    if not resume.strip():
        resume = _read_multiline("\nPaste your resume")

    short_blurb = state.short_blurb or input("\nShort blurb about you: ").strip()

    job_description = state.job_description
    if not job_description.strip():
        job_description = _read_multiline("\nPaste the job description")

    controller.update_context(
        role=role,
        resume=resume,
        short_blurb=short_blurb,
        job_description=job_description,
    )


def render(controller: SessionController) -> None:
    """Print the current question and any feedback for it."""
    state = controller.state
    print("\n" + "=" * 80)
    print(
        f"{state.role.label} | Question {state.current_question_index + 1} of {state.total_questions}"
        f" | {state.questions_completed} answered"
    )
    print("=" * 80)
    print(f"\n❓ {state.current_question}")

    answer = state.current_answer
    if answer is None:
        return

    print(f"\n📝 Your answer:\n{answer.text}")
    if answer.feedback is None:
        return

    feedback = answer.feedback
    print(f"\n{SCORE_BADGES[feedback.score.value]}  {feedback.verdict}")
    print(f"\n✨ Improved answer:\n{feedback.improved_answer}")
    if feedback.improvements:
        print("\n🔧 What to improve:")
        for item in feedback.improvements:
            print(f"   • {item}")


def interview_loop(controller: SessionController) -> bool:
    """
    Run the question/answer loop.

    Returns:
        True if the user reset the session, False if they quit
    """
    announced_completion = controller.status == SessionStatus.COMPLETED
    while True:
        render(controller)
        if controller.status == SessionStatus.COMPLETED and not announced_completion:
            print("\n🎉 You've answered every question. Review your feedback or reset to start over.")
            announced_completion = True

        print(COMMANDS)
        command = input("> ").strip().lower()

        if command == "a":
            text = _read_multiline("\nYour answer")
            print("\n⏳ Coaching your answer...")
            controller.submit_answer(text)
        elif command == "n":
            controller.next_question()
        elif command == "p":
            controller.previous_question()
        elif command in ("r", "s", "m"):
            mode = {
                "r": RewriteMode.REGENERATE,
                "s": RewriteMode.SHORTEN,
                "m": RewriteMode.ADD_METRICS,
            }[command]
            if not controller.regenerate_feedback(mode) and controller.state.current_answer is None:
                _alert("Answer this question first.")
        elif command == "x":
            if controller.clear(_confirm):
                return True
        elif command == "q":
            return False
        else:
            print("Unknown command.")


def practice(args: argparse.Namespace) -> int:
    """Interactive practice session."""
    store = SessionStore(args.storage_dir)
    with CoachClient(base_url=args.api_url, api_key=args.api_key) as client:
        controller = SessionController(client, store, notify=_alert)

        while True:
            if controller.status == SessionStatus.SETUP:
                print("\n🚀 New interview session")
                collect_context(controller, resume_file=args.resume_file)
                print("\n⏳ Generating interview questions...")
                if not controller.start_interview():
                    return 1
            else:
                print("\n📂 Resuming saved session")

            if not interview_loop(controller):
                print("\n👋 Progress saved. See you next time.")
                return 0


def serve(args: argparse.Namespace) -> int:
    """Start the FastAPI server."""
    from interview_prep.api.main import run_server
    run_server(host=args.host, port=args.port, reload=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="interview-prep",
        description="Practice role-specific interviews with AI coaching."
    )
    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="run the coaching API")
    serve_parser.add_argument("--host", default=SERVER_CONFIG["host"])
    serve_parser.add_argument("--port", type=int, default=SERVER_CONFIG["port"])

    parser.add_argument("--api-url", default=CLIENT_CONFIG["base_url"],
                        help="coaching API base URL")
    parser.add_argument("--api-key", default=None,
                        help="model API key to use for coaching requests")
    parser.add_argument("--resume-file", default=None,
                        help="load resume from a .txt or .pdf file")
    parser.add_argument("--storage-dir", default=None,
                        help="directory for the saved session")
    return parser


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.command == "serve":
        return serve(args)
    try:
        return practice(args)
    except (KeyboardInterrupt, EOFError):
        print("\n👋 Progress saved. See you next time.")
        return 0


if __name__ == "__main__":
    sys.exit(run())
