# scripts/chat_cli.py
import os
import sys

import requests
from dotenv import load_dotenv

load_dotenv()

from footcare.annotator import annotate_session
from footcare.dialogue import GREETING

API_URL = os.getenv("FOOTCARE_API_URL", "http://127.0.0.1:8000/api")
ERROR_REPLY = "I apologize, but I encountered an error. Please try again."


class ChatClient:
    """Terminal counterpart of the web chat page."""

    def __init__(self, api_url=API_URL):
        self.api_url = api_url.rstrip("/")
        self.messages = [{"role": "assistant", "content": GREETING}]
        self.patient_id = None
        self.session_id = None

    def _post(self, path, body):
        resp = requests.post(f"{self.api_url}{path}", json=body, timeout=30)
        resp.raise_for_status()
        return resp.json()

    def _register_patient(self):
        user_texts = [m["content"] for m in self.messages if m["role"] == "user"]
        if self.patient_id or len(user_texts) < 3:
            return
        try:
            patient = self._post(
                "/patients",
                {"name": user_texts[0], "email": user_texts[1], "phone": user_texts[2]},
            )["patient"]
            self.patient_id = patient["id"]
            session = self._post(
                "/sessions",
                {"patientId": self.patient_id, "issueCategory": "general", "symptoms": ""},
            )["session"]
            self.session_id = session["id"]
        except requests.RequestException as e:
            print("Error creating patient:", e, file=sys.stderr)

    def _annotate(self, history, text):
        if not self.session_id:
            return
        updates = annotate_session(history, text)
        if not updates:
            return
        try:
            resp = requests.patch(
                f"{self.api_url}/sessions",
                json={"sessionId": self.session_id, "updates": updates},
                timeout=30,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            print("Error updating session:", e, file=sys.stderr)

    def send(self, text):
        history = list(self.messages)
        self.messages.append({"role": "user", "content": text})
        self._register_patient()
        self._annotate(history, text)

        try:
            data = self._post(
                "/chat",
                {
                    "messages": self.messages,
                    "sessionId": self.session_id,
                    "patientId": self.patient_id,
                },
            )
            reply = data["message"]
        except requests.RequestException as e:
            print("Chat error:", e, file=sys.stderr)
            reply = ERROR_REPLY
        self.messages.append({"role": "assistant", "content": reply})
        return reply


def main():
    client = ChatClient()
    print(GREETING)
    while True:
        try:
            text = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            break
        if not text:
            continue
        if text.lower() in ("quit", "exit"):
            break
        print("\n" + client.send(text))
    if client.session_id:
        print(f"\nSession saved: {client.session_id}")


if __name__ == "__main__":
    main()
