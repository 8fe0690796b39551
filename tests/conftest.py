import os

# Point the app at a throwaway database before config is imported
os.environ['DATABASE_URL'] = 'sqlite:///test_capstone.db'
os.environ['LOG_FILE'] = 'logs/test_capstone.log'

import pytest
from capstone.database import init_db, drop_db, DatabaseManager
from capstone.models import Faculty, Project, Student
from capstone.models.faculty import FacultyRole


@pytest.fixture
def database():
    """Fresh schema for each test"""
    init_db()
    yield
    drop_db()


@pytest.fixture
def make_faculty(database):
    """Factory creating faculty rows in insertion order"""
    faculty_db = DatabaseManager(Faculty)
    counter = {'n': 0}

    def _make(name=None, role=FacultyRole.FACULTY):
        counter['n'] += 1
        n = counter['n']
        return faculty_db.create(
            employee_id=f'EMP{n:03d}',
            name=name or f'Faculty {n}',
            email_id=f'faculty{n}@vit.ac.in',
            password_hash='hashed',
            role=role
        )

    return _make


@pytest.fixture
def make_project(database):
    """Factory creating a project with its students"""
    project_db = DatabaseManager(Project)
    student_db = DatabaseManager(Student)

    def _make(guide, reg_nos=(), name='Team', panel=None, deadline=None):
        project = project_db.create(
            name=name,
            guide_faculty_id=guide.id,
            panel_id=panel.id if panel else None
        )
        students = [
            student_db.create(reg_no=reg_no, name=f'Student {reg_no}', project_id=project.id, deadline=deadline)
            for reg_no in reg_nos
        ]
        return project, students

    return _make
