#!/usr/bin/env python3
"""
Script to seed the database with sample faculty, teams and deadlines
"""

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import datetime, timedelta
from capstone.database import init_db, drop_db, get_db
from capstone.models import Faculty, Project, Student, SystemConfig
from capstone.models.faculty import FacultyRole
from capstone.utils.security import hash_password, generate_token
from config.config import Config


def create_faculty(db):
    """Create one admin and a pool of faculty"""
    admin = Faculty(
        employee_id='ADM001',
        name='Head Admin',
        email_id=f'admin{Config.COLLEGE_EMAIL_DOMAIN}',
        password_hash=hash_password('Admin@12345'),
        role=FacultyRole.ADMIN
    )
    db.add(admin)

    faculty = []
    for i in range(1, 8):
        member = Faculty(
            employee_id=f'FAC{i:03d}',
            name=f'Faculty {i}',
            email_id=f'faculty{i}{Config.COLLEGE_EMAIL_DOMAIN}',
            password_hash=hash_password(f'Faculty@{i}2345'),
            role=FacultyRole.FACULTY
        )
        db.add(member)
        faculty.append(member)

    db.flush()
    print(f"Created 1 admin and {len(faculty)} faculty")
    return admin, faculty


def create_teams(db, faculty):
    """Create project teams of three students, guides assigned round-robin"""
    projects = []
    reg = 1
    for i in range(10):
        guide = faculty[i % len(faculty)]
        project = Project(name=f'Capstone Team {i + 1}', guide_faculty_id=guide.id)
        db.add(project)
        db.flush()

        for _ in range(3):
            db.add(Student(
                reg_no=f'21BCE{reg:04d}',
                name=f'Student {reg}',
                project_id=project.id
            ))
            reg += 1
        projects.append(project)

    db.flush()
    print(f"Created {len(projects)} teams with {reg - 1} students")
    return projects


def create_default_deadlines(db):
    """Open every review window for the next few weeks"""
    now = datetime.utcnow()
    deadlines = {}
    for offset, review_type in enumerate(['review0', 'draftReview', 'review1', 'review2', 'review3']):
        deadlines[review_type] = {
            'from': (now + timedelta(weeks=offset * 2)).isoformat(),
            'to': (now + timedelta(weeks=offset * 2 + 2)).isoformat()
        }
    db.add(SystemConfig(default_deadlines=deadlines))
    print("Created default deadlines")


def main():
    """Main seeding function"""
    print("Dropping existing database...")
    drop_db()

    print("Initializing new database...")
    init_db()

    # Use a single session for all operations
    with get_db() as db:
        admin, faculty = create_faculty(db)
        create_teams(db, faculty)
        create_default_deadlines(db)
        admin_token = generate_token({'employee_id': admin.employee_id, 'role': 'admin'})

    print("\nDatabase seeded successfully!")
    print(f"Admin token (ADM001): {admin_token}")
    print("Run scripts/auto_assign_panels.py --create to build and assign panels.")


if __name__ == "__main__":
    main()
