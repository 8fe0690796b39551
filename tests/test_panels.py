import pytest
from capstone.database import DatabaseManager, get_db
from capstone.models import Panel, Project
from capstone.models.faculty import FacultyRole
from capstone.services.panel_service import PanelService


def stored_panels():
    with get_db() as db:
        return db.query(Panel).order_by(Panel.id).all()


@pytest.fixture
def faculty_pool(make_faculty):
    """Three regular faculty plus an admin who never sits on panels"""
    make_faculty('Admin', role=FacultyRole.ADMIN)
    return [make_faculty(f'Faculty {c}') for c in 'ABC']


class TestCreatePanel:
    """Test manual panel creation"""

    def test_create_panel(self, faculty_pool):
        a, b, _ = faculty_pool
        result = PanelService().create_panel(a.id, b.id)

        assert result['success'] is True
        assert result['data']['faculty1']['id'] == a.id
        assert result['data']['faculty2']['id'] == b.id

    @pytest.mark.parametrize('ids', [(None, 2), (2, 2)])
    def test_requires_two_distinct_faculty(self, faculty_pool, ids):
        result = PanelService().create_panel(*ids)
        assert result['error_type'] == 'validation'

    def test_unknown_faculty(self, faculty_pool):
        result = PanelService().create_panel(faculty_pool[0].id, 999)
        assert result['error_type'] == 'not_found'

    def test_delete_detaches_projects(self, faculty_pool, make_project):
        a, b, c = faculty_pool
        service = PanelService()
        panel_id = service.create_panel(a.id, b.id)['data']['id']
        project, _ = make_project(c, panel=DatabaseManager(Panel).get_by(id=panel_id))

        result = service.delete_panel(panel_id)

        assert result['success'] is True
        assert DatabaseManager(Panel).get_by(id=panel_id) is None
        assert DatabaseManager(Project).get_by(id=project.id).panel_id is None

    def test_delete_unknown_panel(self, database):
        result = PanelService().delete_panel(42)
        assert result['error_type'] == 'not_found'
        assert result['message'] == 'No panel found for the provided ID'


class TestAutoCreatePanels:
    """Test pairing the faculty pool into panels"""

    def test_odd_pool_wraps_around(self, faculty_pool):
        a, b, c = faculty_pool
        result = PanelService().auto_create_panels()

        assert result['success'] is True
        assert result['panels_created'] == 2
        pairs = [(p.faculty1_id, p.faculty2_id) for p in stored_panels()]
        assert pairs == [(a.id, b.id), (c.id, a.id)]

    def test_existing_panels_need_force(self, faculty_pool):
        service = PanelService()
        service.auto_create_panels()

        result = service.auto_create_panels()

        assert result['success'] is False
        assert result['error_type'] == 'conflict'
        assert result['existing_panels'] == 2
        assert DatabaseManager(Panel).count() == 2

    @pytest.mark.parametrize('force', [True, 'true', 'TRUE'])
    def test_force_replaces_panels(self, faculty_pool, make_project, force):
        service = PanelService()
        service.auto_create_panels()
        project, _ = make_project(faculty_pool[1], panel=stored_panels()[0])

        result = service.auto_create_panels(force=force)

        assert result['success'] is True
        assert result['message'] == 'Existing panels replaced successfully.'
        assert DatabaseManager(Project).get_by(id=project.id).panel_id is None
        assert result['panels_created'] == 2
        assert DatabaseManager(Panel).count() == 2

    def test_not_enough_faculty(self, make_faculty):
        make_faculty()
        make_faculty('Admin', role=FacultyRole.ADMIN)

        result = PanelService().auto_create_panels()

        assert result['error_type'] == 'validation'
        assert DatabaseManager(Panel).count() == 0


class TestAutoAssignPanels:
    """Test assigning panels to unassigned projects"""

    def test_no_panels(self, faculty_pool, make_project):
        make_project(faculty_pool[0])
        assert PanelService().auto_assign_panels_to_projects()['error_type'] == 'validation'

    def test_nothing_to_assign(self, faculty_pool):
        service = PanelService()
        service.auto_create_panels()

        result = service.auto_assign_panels_to_projects()

        assert result['success'] is True
        assert result['message'] == 'All projects already have panels.'
        assert result['assigned'] == 0

    def test_guide_never_on_own_panel(self, faculty_pool, make_project):
        a, b, c = faculty_pool
        service = PanelService()
        panel_id = DatabaseManager(Panel).create(faculty1_id=a.id, faculty2_id=b.id).id
        guided_by_a, _ = make_project(a, name='Guided by A')
        guided_by_c, _ = make_project(c, name='Guided by C')

        result = service.auto_assign_panels_to_projects()

        assert result['assigned'] == 1
        assert result['skipped'] == 1
        assert DatabaseManager(Project).get_by(id=guided_by_a.id).panel_id is None
        assert DatabaseManager(Project).get_by(id=guided_by_c.id).panel_id == panel_id

    def test_balances_with_existing_load(self, faculty_pool, make_faculty, make_project):
        a, b, c = faculty_pool
        d = make_faculty('Faculty D')
        busy = DatabaseManager(Panel).create(faculty1_id=a.id, faculty2_id=b.id)
        idle = DatabaseManager(Panel).create(faculty1_id=c.id, faculty2_id=d.id)
        guide = make_faculty('Guide')
        make_project(guide, name='Existing 1', panel=busy)
        make_project(guide, name='Existing 2', panel=busy)
        new_projects = [make_project(guide, name=f'New {i}')[0] for i in range(4)]

        result = PanelService().auto_assign_panels_to_projects()

        assert result['assigned'] == 4
        assigned = [DatabaseManager(Project).get_by(id=p.id).panel_id for p in new_projects]
        assert assigned.count(idle.id) == 3
        assert assigned.count(busy.id) == 1


class TestManualAssignment:
    """Test assigning panels to a single project"""

    def test_assign_new_panel(self, faculty_pool, make_project):
        a, b, c = faculty_pool
        project, _ = make_project(c)

        result = PanelService().assign_panel_to_project([a.id, b.id], project.id)

        assert result['success'] is True
        assert DatabaseManager(Project).get_by(id=project.id).panel_id == result['data']['panel']['id']

    @pytest.mark.parametrize('ids', [[1], [1, 2, 3], 'ab', None, [None, 1], [2, 0], [3, 3]])
    def test_needs_two_distinct_faculty(self, faculty_pool, make_project, ids):
        project, _ = make_project(faculty_pool[2])
        assert PanelService().assign_panel_to_project(ids, project.id)['error_type'] == 'validation'

    def test_unknown_project(self, faculty_pool):
        a, b, _ = faculty_pool
        assert PanelService().assign_panel_to_project([a.id, b.id], 999)['error_type'] == 'not_found'

    def test_guide_on_new_panel(self, faculty_pool, make_project):
        a, b, _ = faculty_pool
        project, _ = make_project(a)

        result = PanelService().assign_panel_to_project([a.id, b.id], project.id)

        assert result['error_type'] == 'conflict'
        assert DatabaseManager(Panel).count() == 0

    def test_assign_existing_panel(self, faculty_pool, make_project):
        a, b, c = faculty_pool
        panel = DatabaseManager(Panel).create(faculty1_id=a.id, faculty2_id=b.id)
        project, _ = make_project(c)

        result = PanelService().assign_existing_panel_to_project(panel.id, project.id)

        assert result['success'] is True
        assert DatabaseManager(Project).get_by(id=project.id).panel_id == panel.id

    def test_existing_panel_with_guide(self, faculty_pool, make_project):
        a, b, _ = faculty_pool
        panel = DatabaseManager(Panel).create(faculty1_id=a.id, faculty2_id=b.id)
        project, _ = make_project(b)

        result = PanelService().assign_existing_panel_to_project(panel.id, project.id)

        assert result['error_type'] == 'conflict'
        assert DatabaseManager(Project).get_by(id=project.id).panel_id is None

    @pytest.mark.parametrize('panel_id', [None, 'null'])
    def test_null_panel_removes_assignment(self, faculty_pool, make_project, panel_id):
        a, b, c = faculty_pool
        panel = DatabaseManager(Panel).create(faculty1_id=a.id, faculty2_id=b.id)
        project, _ = make_project(c, panel=panel)

        result = PanelService().assign_existing_panel_to_project(panel_id, project.id)

        assert result['success'] is True
        assert DatabaseManager(Project).get_by(id=project.id).panel_id is None

    def test_panels_with_projects(self, faculty_pool, make_project):
        a, b, c = faculty_pool
        panel = DatabaseManager(Panel).create(faculty1_id=a.id, faculty2_id=b.id)
        make_project(c, ['21BCE0001', '21BCE0002'], name='Drone Mapping', panel=panel)

        result = PanelService().get_panels_with_projects()

        assert result['success'] is True
        assert len(result['data']) == 1
        projects = result['data'][0]['projects']
        assert [p['name'] for p in projects] == ['Drone Mapping']
        assert len(projects[0]['students']) == 2
