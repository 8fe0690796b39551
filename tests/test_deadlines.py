import pytest
from capstone.services.deadline_service import DeadlineService


class TestDefaultDeadlines:
    """Test the default deadline configuration"""

    def test_not_set(self, database):
        result = DeadlineService().get_default_deadlines()
        assert result['success'] is False
        assert result['error_type'] == 'not_found'

    def test_first_write_creates_config(self, database):
        service = DeadlineService()
        result = service.set_default_deadlines({'review0': '2025-05-05'})

        assert result['success'] is True
        assert service.get_default_deadlines()['data'] == {'review0': '2025-05-05T00:00:00'}

    def test_writes_merge(self, database):
        service = DeadlineService()
        service.set_default_deadlines({
            'review0': '2025-05-05',
            'review1': {'from': '2025-05-10', 'to': '2025-06-01'}
        })
        service.set_default_deadlines({'review1': {'from': '2025-05-20', 'to': '2025-06-15'}})

        data = service.get_default_deadlines()['data']
        assert data['review0'] == '2025-05-05T00:00:00'
        assert data['review1'] == {'from': '2025-05-20T00:00:00', 'to': '2025-06-15T00:00:00'}

    @pytest.mark.parametrize('payload', [
        None,
        {},
        {'review9': '2025-05-05'},
        {'review1': {'from': '2025-06-01', 'to': '2025-05-01'}},
        {'review1': {'from': '2025-06-01'}},
        {'review2': 'soon'},
    ])
    def test_invalid_payloads(self, database, payload):
        result = DeadlineService().set_default_deadlines(payload)
        assert result['success'] is False
        assert result['error_type'] == 'validation'
