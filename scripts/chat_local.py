#!/usr/bin/env python3
"""
Interactive local chat harness (no HTTP, no Twilio).

Usage:
  python3 scripts/chat_local.py [en|es|auto]

What it does:
- Keeps a stable session id for the run
- Sends your typed messages through the same ProcessMessageUseCase the API uses
- Hands appointment intents to the booking flow, like the voice webhook does
- Prints decision details (intent, confidence, language, entities) and the reply text
"""

from __future__ import annotations

import os
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.wiring.dependencies import (  # noqa: E402
    get_booking_use_case,
    get_conversation_store,
    get_process_message_use_case,
)


def _print_header(session_id: str, language: str) -> None:
    print("\nLocal Chat Harness")
    print("-" * 60)
    print(f"session_id: {session_id}  language: {language}")
    print("Type your message and press Enter.")
    print("Commands: /new (new session), /state, /quit, /help")
    print("-" * 60)


def main() -> None:
    language = sys.argv[1] if len(sys.argv) > 1 else os.getenv("CHAT_LANGUAGE", "auto")
    session_id = os.getenv("CHAT_SESSION_ID", "local_user_1")
    use_case = get_process_message_use_case()
    booking = get_booking_use_case()
    store = get_conversation_store()
    _print_header(session_id, language)

    while True:
        try:
            user_text = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_text:
            continue

        cmd = user_text.lower()
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print("Commands:")
            print("  /new   -> start a new session id (drops any booking in progress)")
            print("  /state -> show the stored conversation state")
            print("  /quit  -> exit")
            continue
        if cmd == "/new":
            session_id = f"local_user_{int(time.time())}"
            print(f"New session_id: {session_id}")
            continue
        if cmd == "/state":
            print(store.get_state(session_id))
            continue

        if booking.is_active(session_id):
            booking_language = language if language != "auto" else (store.get_state(session_id).language or "en")
            result = booking.process_turn(session_id, user_text, booking_language)
            print("\n--- Booking ---")
            print(f"action: {result.action}")
            print(f"state: {result.updated_state}")
            print("\n--- Reply ---")
            print(result.message)
            print("-" * 60)
            continue

        processed = use_case.execute(user_text, language, session_id=session_id)
        intent = processed.intent
        reply = processed.response
        if intent.is_appointment:
            result = booking.start(session_id, intent.service, processed.language, text=user_text)
            if result.action not in {"ask_service", "ask_date"}:
                reply = result.message

        print("\n--- Decision ---")
        print(f"intent: {intent.type.value}")
        print(f"confidence: {intent.confidence}")
        print(f"language: {processed.language}")
        if intent.service:
            print(f"service: {intent.service}")
        if intent.entities:
            print("entities: " + ", ".join(f"{e.type}={e.value}" for e in intent.entities))

        print("\n--- Reply ---")
        print(reply.strip() or "(empty reply)")
        print("-" * 60)


if __name__ == "__main__":
    main()
