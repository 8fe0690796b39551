from typing import Dict, List
from capstone.database import get_db
from capstone.models import Faculty, Panel, Project
from capstone.models.faculty import FacultyRole
from capstone.services.matching_service import pair_faculty, plan_panel_assignments
from capstone.utils.errors import (
    ServiceError, ValidationError, NotFoundError, ConflictError, InternalError
)
from capstone.utils.logger import get_logger

logger = get_logger(__name__)


def _faculty_summary(faculty: Faculty) -> Dict:
    if faculty is None:
        return None
    return {
        'id': faculty.id,
        'employee_id': faculty.employee_id,
        'name': faculty.name,
        'email_id': faculty.email_id
    }


def serialize_panel(panel: Panel) -> Dict:
    return {
        'id': panel.id,
        'faculty1': _faculty_summary(panel.faculty1),
        'faculty2': _faculty_summary(panel.faculty2)
    }


def serialize_project(project: Project) -> Dict:
    return {
        'id': project.id,
        'name': project.name,
        'guide_faculty_id': project.guide_faculty_id,
        'panel_id': project.panel_id,
        'students': [{'id': s.id, 'reg_no': s.reg_no, 'name': s.name} for s in project.students]
    }


def _parse_force(value) -> bool:
    return value is True or (isinstance(value, str) and value.lower() == 'true')


class PanelService:
    """Service for evaluation panels and their assignment to projects"""

    def create_panel(self, faculty1_id, faculty2_id) -> Dict:
        """Create a panel from two faculty members"""
        try:
            if not faculty1_id or not faculty2_id or faculty1_id == faculty2_id:
                raise ValidationError('Two distinct faculty IDs are required.')

            with get_db() as db:
                self._get_faculty(db, faculty1_id)
                self._get_faculty(db, faculty2_id)

                panel = Panel(faculty1_id=faculty1_id, faculty2_id=faculty2_id)
                db.add(panel)
                db.flush()

                logger.info(f"Panel {panel.id} created for faculty {faculty1_id} and {faculty2_id}")

                return {
                    'success': True,
                    'message': 'Panel created successfully',
                    'data': serialize_panel(panel)
                }

        except ServiceError as e:
            return e.to_result()
        except Exception as e:
            logger.error(f"Error creating panel: {str(e)}")
            return InternalError('Failed to create panel').to_result()

    def delete_panel(self, panel_id: int) -> Dict:
        """Delete a panel and detach it from its projects"""
        try:
            with get_db() as db:
                panel = db.query(Panel).filter_by(id=panel_id).first()
                if not panel:
                    raise NotFoundError('No panel found for the provided ID')

                data = serialize_panel(panel)
                detached = db.query(Project).filter(Project.panel_id == panel.id).update(
                    {Project.panel_id: None}, synchronize_session=False
                )
                db.delete(panel)

                logger.info(f"Panel {panel_id} deleted, detached from {detached} projects")

                return {
                    'success': True,
                    'message': 'Panel deleted successfully and removed from associated projects',
                    'data': data
                }

        except ServiceError as e:
            return e.to_result()
        except Exception as e:
            logger.error(f"Error deleting panel {panel_id}: {str(e)}")
            return InternalError('Failed to delete panel').to_result()

    def get_panels_with_projects(self) -> Dict:
        """All panels with the projects they evaluate"""
        try:
            with get_db() as db:
                panels = db.query(Panel).order_by(Panel.id).all()
                data = []
                for panel in panels:
                    entry = serialize_panel(panel)
                    entry['projects'] = [serialize_project(p) for p in panel.projects]
                    data.append(entry)

                return {'success': True, 'data': data}

        except Exception as e:
            logger.error(f"Error fetching panels with projects: {str(e)}")
            return InternalError('Error fetching panels with projects').to_result()

    def auto_create_panels(self, force=False) -> Dict:
        """Pair the faculty pool into panels.

        Existing panels are only replaced when forced. Clearing project
        references and deleting old panels is committed before new panels
        are built, and is not undone if pairing fails.
        """
        force = _parse_force(force)

        try:
            with get_db() as db:
                existing_count = db.query(Panel).count()

                if existing_count > 0 and not force:
                    raise ConflictError(
                        'Panels already exist. Use force=true parameter to recreate panels.',
                        existing_panels=existing_count
                    )

                if existing_count > 0:
                    db.query(Project).filter(Project.panel_id.isnot(None)).update(
                        {Project.panel_id: None}, synchronize_session=False
                    )
                    db.query(Panel).delete(synchronize_session=False)
                    logger.info(f"Deleted {existing_count} existing panels due to force={force}")

            with get_db() as db:
                faculty_ids = [
                    f.id for f in db.query(Faculty).filter(
                        Faculty.role == FacultyRole.FACULTY
                    ).order_by(Faculty.id).all()
                ]

                if len(faculty_ids) < 2:
                    raise ValidationError('Not enough faculty members to create panels.')

                created = []
                for faculty1_id, faculty2_id in pair_faculty(faculty_ids):
                    panel = Panel(faculty1_id=faculty1_id, faculty2_id=faculty2_id)
                    db.add(panel)
                    created.append(panel)
                db.flush()

                logger.info(f"Auto-created {len(created)} panels from {len(faculty_ids)} faculty")

                return {
                    'success': True,
                    'message': ('Existing panels replaced successfully.' if existing_count > 0
                                else 'Panels created successfully.'),
                    'panels_created': len(created),
                    'data': [serialize_panel(p) for p in created]
                }

        except ServiceError as e:
            return e.to_result()
        except Exception as e:
            logger.error(f"Error auto-creating panels: {str(e)}")
            return InternalError('Failed to create panels').to_result()

    def auto_assign_panels_to_projects(self) -> Dict:
        """Give every project without a panel the least loaded eligible panel.

        Projects whose guide sits on every panel are skipped and logged.
        """
        try:
            with get_db() as db:
                candidates = db.query(Project).filter(Project.panel_id.is_(None)).order_by(Project.id).all()
                panels = db.query(Panel).order_by(Panel.id).all()

                if not panels:
                    raise ValidationError('No panels available.')

                if not candidates:
                    return {
                        'success': True,
                        'message': 'All projects already have panels.',
                        'assigned': 0,
                        'skipped': 0
                    }

                # Build on existing load rather than starting from zero
                usage = {}
                for panel in panels:
                    usage[panel.id] = db.query(Project).filter(Project.panel_id == panel.id).count()

                assignments, skipped = plan_panel_assignments(
                    [(p.id, p.guide_faculty_id) for p in candidates],
                    [(p.id, p.faculty1_id, p.faculty2_id) for p in panels],
                    usage
                )

                projects = {p.id: p for p in candidates}
                for project_id, panel_id in assignments:
                    projects[project_id].panel_id = panel_id
                    db.flush()

                logger.info(
                    f"Auto-assigned panels to {len(assignments)} projects, skipped {len(skipped)}"
                )

                return {
                    'success': True,
                    'message': 'Panels assigned automatically to unassigned projects.',
                    'assigned': len(assignments),
                    'skipped': len(skipped)
                }

        except ServiceError as e:
            return e.to_result()
        except Exception as e:
            logger.error(f"Error in auto_assign_panels_to_projects: {str(e)}")
            return InternalError('Failed to assign panels').to_result()

    def assign_panel_to_project(self, panel_faculty_ids: List, project_id: int) -> Dict:
        """Build a new panel from two faculty and assign it to a project"""
        try:
            if not isinstance(panel_faculty_ids, (list, tuple)) or len(panel_faculty_ids) != 2:
                raise ValidationError('Exactly 2 panel faculty IDs required.')

            faculty1_id, faculty2_id = panel_faculty_ids
            if not faculty1_id or not faculty2_id:
                raise ValidationError('Exactly 2 panel faculty IDs required.')
            if faculty1_id == faculty2_id:
                raise ValidationError('Panel faculty members must be distinct.')

            with get_db() as db:
                faculty1 = db.query(Faculty).filter_by(id=faculty1_id).first()
                faculty2 = db.query(Faculty).filter_by(id=faculty2_id).first()
                if not faculty1 or not faculty2:
                    raise NotFoundError('One or both faculty not found.')

                project = self._get_project(db, project_id)

                if project.guide_faculty_id in (faculty1.id, faculty2.id):
                    raise ConflictError('Guide faculty cannot be a panel member for their own project.')

                panel = Panel(faculty1_id=faculty1.id, faculty2_id=faculty2.id)
                db.add(panel)
                db.flush()

                project.panel_id = panel.id
                db.flush()

                logger.info(f"Panel {panel.id} created and assigned to project {project.id}")

                return {
                    'success': True,
                    'message': 'Panel assigned successfully',
                    'data': {**serialize_project(project), 'panel': serialize_panel(panel)}
                }

        except ServiceError as e:
            return e.to_result()
        except Exception as e:
            logger.error(f"Error assigning panel to project {project_id}: {str(e)}")
            return InternalError('Failed to assign panel').to_result()

    def assign_existing_panel_to_project(self, panel_id, project_id: int) -> Dict:
        """Assign an existing panel to a project; a null panel id removes it"""
        try:
            with get_db() as db:
                project = self._get_project(db, project_id)

                if not panel_id or panel_id == 'null':
                    project.panel_id = None
                    db.flush()
                    logger.info(f"Panel removed from project {project.id}")
                    return {
                        'success': True,
                        'message': 'Panel removed from project successfully',
                        'data': serialize_project(project)
                    }

                panel = db.query(Panel).filter_by(id=panel_id).first()
                if not panel:
                    raise NotFoundError('Panel not found.')

                if panel.has_member(project.guide_faculty_id):
                    raise ConflictError('Guide faculty cannot be a panel member for their own project.')

                project.panel_id = panel.id
                db.flush()

                logger.info(f"Panel {panel.id} assigned to project {project.id}")

                return {
                    'success': True,
                    'message': 'Panel assigned successfully',
                    'data': {**serialize_project(project), 'panel': serialize_panel(panel)}
                }

        except ServiceError as e:
            return e.to_result()
        except Exception as e:
            logger.error(f"Error assigning panel {panel_id} to project {project_id}: {str(e)}")
            return InternalError('Failed to assign panel').to_result()

    def _get_faculty(self, db, faculty_id) -> Faculty:
        faculty = db.query(Faculty).filter_by(id=faculty_id).first()
        if not faculty:
            raise NotFoundError(f"Faculty {faculty_id} not found")
        return faculty

    def _get_project(self, db, project_id) -> Project:
        project = db.query(Project).filter_by(id=project_id).first()
        if not project:
            raise NotFoundError('Project not found.')
        return project
