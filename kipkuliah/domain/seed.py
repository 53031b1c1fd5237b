"""Fixed baseline loaded into both stores at startup."""
from __future__ import annotations

import copy
from datetime import datetime, timezone

_STUDENTS = (
    {"studentId": "2021001", "name": "Ahmad Rizki", "registered": True},
    {"studentId": "2021002", "name": "Siti Nurhaliza", "registered": True},
    {"studentId": "2021003", "name": "Budi Santoso", "registered": False},
    {"studentId": "2022001", "name": "Dewi Sartika", "registered": True},
    {"studentId": "2022002", "name": "Muhammad Fadli", "registered": True},
)

_DISCUSSIONS = (
    {
        "id": 1,
        "name": "Ahmad",
        "email": "ahmad@student.uin.ac.id",
        "question": "Bagaimana cara mengajukan perpanjangan KIP Kuliah?",
        "createdAt": datetime(2024, 1, 15, tzinfo=timezone.utc),
        "answer": (
            "Untuk perpanjangan KIP Kuliah, silakan hubungi bagian kemahasiswaan "
            "dengan membawa dokumen yang diperlukan."
        ),
        "answeredAt": None,
    },
    {
        "id": 2,
        "name": "Siti",
        "email": "siti@student.uin.ac.id",
        "question": "Apakah ada batasan IPK untuk mempertahankan KIP Kuliah?",
        "createdAt": datetime(2024, 1, 10, tzinfo=timezone.utc),
        "answer": "Ya, mahasiswa harus mempertahankan IPK minimal 2.75 untuk dapat melanjutkan KIP Kuliah.",
        "answeredAt": None,
    },
)


def seed_students() -> list[dict]:
    return copy.deepcopy(list(_STUDENTS))


def seed_discussions() -> list[dict]:
    return copy.deepcopy(list(_DISCUSSIONS))
