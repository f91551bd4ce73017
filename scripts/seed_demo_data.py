# scripts/seed_demo_data.py
import os

import requests
from dotenv import load_dotenv

load_dotenv()

API_URL = os.getenv("FOOTCARE_API_URL", "http://127.0.0.1:8000/api")

patients = [
    {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "555-0101",
        "updates": {
            "issue_category": "Ingrown Toenail",
            "symptoms": "my big toenail is red and swollen",
            "satisfaction_score": 5,
            "satisfaction_feedback": "Very quick and clear",
            "status": "completed",
        },
    },
    {
        "name": "Sam Lee",
        "email": "sam@example.com",
        "phone": "555-0102",
        "updates": {
            "issue_category": "Heel Pain / Plantar Fasciitis",
            "symptoms": "heel hurts in the morning",
            "status": "scheduled",
        },
    },
    {
        "name": "Alex Kim",
        "email": "alex@example.com",
        "phone": "555-0103",
        "updates": {
            "issue_category": "Athlete's Foot / Fungal Infection",
            "symptoms": "itchy skin between toes",
            "satisfaction_score": 4,
            "satisfaction_feedback": "Helpful",
            "status": "completed",
        },
    },
]

for p in patients:
    resp = requests.post(
        f"{API_URL}/patients",
        json={"name": p["name"], "email": p["email"], "phone": p["phone"]},
        timeout=30,
    )
    resp.raise_for_status()
    patient_id = resp.json()["patient"]["id"]

    resp = requests.post(f"{API_URL}/sessions", json={"patientId": patient_id}, timeout=30)
    resp.raise_for_status()
    session_id = resp.json()["session"]["id"]

    resp = requests.patch(
        f"{API_URL}/sessions",
        json={"sessionId": session_id, "updates": p["updates"]},
        timeout=30,
    )
    resp.raise_for_status()
    print(f"seeded {p['name']} -> session {session_id}")

print(requests.get(f"{API_URL}/analytics", timeout=30).json()["analytics"])
