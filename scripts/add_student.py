#!/usr/bin/env python3
"""
Register a student ID directly in the database.

Usage:
  python scripts/add_student.py --student-id 2023001 --name "Nama Mahasiswa" [--unregistered]
"""
from __future__ import annotations

import argparse
import sys

from kipkuliah.core.config import get_settings
from kipkuliah.domain.records import STUDENTS
from kipkuliah.repositories.sql_repository import SQLStore


def main() -> None:
    ap = argparse.ArgumentParser(description="Register a student in the database")
    ap.add_argument("--student-id", required=True, help="Student ID (ex.: 2023001)")
    ap.add_argument("--name", default="", help="Display name")
    ap.add_argument("--unregistered", action="store_true", help="Store the ID as not enrolled in KIP Kuliah")
    args = ap.parse_args()

    student_id = (args.student_id or "").strip()
    if not student_id:
        raise SystemExit("Invalid student ID")

    store = SQLStore.connect(get_settings().database_url)
    try:
        students = store.collection(STUDENTS)
        if students.find_one({"studentId": student_id}):
            raise SystemExit(f"Student ID '{student_id}' already exists")
        students.insert_one(
            {
                "studentId": student_id,
                "name": (args.name or "").strip() or None,
                "registered": not args.unregistered,
            }
        )
    finally:
        store.close()

    print("OK: student registered")
    print(f"  Student ID: {student_id}")
    print(f"  Registered: {'no' if args.unregistered else 'yes'}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
