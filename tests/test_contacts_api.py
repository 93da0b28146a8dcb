"""
Tests for /api/contacts and /api/communications.
"""
from datetime import datetime, timedelta

import pytest


@pytest.fixture
def company(client, auth_headers):
    return client.post('/api/companies', json={'name': 'Acme'}, headers=auth_headers).get_json()


@pytest.fixture
def contact(client, auth_headers, company):
    response = client.post('/api/contacts', json={
        'name': 'Dana Smith',
        'email': 'dana@acme.io',
        'companyId': company['id'],
        'position': 'Recruiter',
        'type': 'RECRUITER',
    }, headers=auth_headers)
    assert response.status_code == 201
    return response.get_json()


class TestContacts:

    def test_create_returns_company_ref(self, contact, company):
        assert contact['companyId'] == company['id']
        assert contact['companyRef'] == {'id': company['id'], 'name': 'Acme'}

    def test_blank_optional_fields_become_null(self, client, auth_headers):
        response = client.post('/api/contacts', json={'name': 'Lee', 'email': '', 'phone': '  '},
                               headers=auth_headers)
        assert response.status_code == 201
        body = response.get_json()
        assert body['email'] is None
        assert body['phone'] is None
        assert body['type'] == 'OTHER'

    def test_invalid_email_rejected(self, client, auth_headers):
        response = client.post('/api/contacts', json={'name': 'Lee', 'email': 'nope'}, headers=auth_headers)
        assert response.status_code == 400

    def test_foreign_company_rejected(self, client, other_headers, company):
        response = client.post('/api/contacts', json={'name': 'Lee', 'companyId': company['id']},
                               headers=other_headers)
        assert response.status_code == 404
        assert response.get_json()['error'] == 'Company not found'

    def test_search_matches_company_name(self, client, auth_headers, contact):
        client.post('/api/contacts', json={'name': 'Unrelated'}, headers=auth_headers)

        found = client.get('/api/contacts?search=acme', headers=auth_headers).get_json()
        assert [c['name'] for c in found] == ['Dana Smith']

    def test_search_matches_position(self, client, auth_headers, contact):
        found = client.get('/api/contacts?search=recruit', headers=auth_headers).get_json()
        assert [c['id'] for c in found] == [contact['id']]

    def test_get_with_and_without_company(self, client, auth_headers, contact):
        plain = client.get(f"/api/contacts/{contact['id']}", headers=auth_headers).get_json()
        assert 'companyRef' not in plain
        included = client.get(f"/api/contacts/{contact['id']}?include=company", headers=auth_headers).get_json()
        assert included['companyRef']['name'] == 'Acme'

    def test_update_and_unlink_company(self, client, auth_headers, contact):
        response = client.put(f"/api/contacts/{contact['id']}", json={'companyId': None, 'notes': 'Met at meetup'},
                              headers=auth_headers)
        assert response.status_code == 200
        body = response.get_json()
        assert body['companyId'] is None
        assert body['notes'] == 'Met at meetup'
        assert body['email'] == 'dana@acme.io'

    def test_delete_cascades_communications(self, client, auth_headers, contact):
        comm = client.post('/api/communications', json={
            'contactId': contact['id'], 'type': 'EMAIL', 'date': '2024-01-01T10:00:00',
        }, headers=auth_headers).get_json()

        assert client.delete(f"/api/contacts/{contact['id']}", headers=auth_headers).status_code == 204
        assert client.get(f"/api/communications/{comm['id']}", headers=auth_headers).status_code == 404


class TestCommunications:

    def test_create_with_follow_ups(self, client, auth_headers, contact):
        response = client.post('/api/communications', json={
            'contactId': contact['id'],
            'type': 'MEETING',
            'subject': 'Coffee chat',
            'date': '2024-03-01T16:00:00Z',
            'duration': 30,
            'followUpActions': [
                {'description': 'Send portfolio', 'priority': 'HIGH'},
                {'description': 'Connect on LinkedIn'},
            ],
        }, headers=auth_headers)
        assert response.status_code == 201
        body = response.get_json()
        assert [a['description'] for a in body['followUpActions']] == ['Send portfolio', 'Connect on LinkedIn']
        assert body['followUpActions'][1]['priority'] == 'MEDIUM'
        assert all(a['completed'] is False for a in body['followUpActions'])

    def test_non_positive_duration_rejected(self, client, auth_headers, contact):
        response = client.post('/api/communications', json={
            'contactId': contact['id'], 'type': 'PHONE', 'date': '2024-03-01T16:00:00', 'duration': 0,
        }, headers=auth_headers)
        assert response.status_code == 400

    def test_foreign_contact_rejected(self, client, other_headers, contact):
        response = client.post('/api/communications', json={
            'contactId': contact['id'], 'type': 'PHONE', 'date': '2024-03-01T16:00:00',
        }, headers=other_headers)
        assert response.status_code == 404

    def test_list_for_contact_newest_first(self, client, auth_headers, contact):
        for day in ('2024-01-01', '2024-02-01', '2024-01-15'):
            client.post('/api/communications', json={
                'contactId': contact['id'], 'type': 'EMAIL', 'date': f'{day}T09:00:00', 'subject': day,
            }, headers=auth_headers)

        listed = client.get(f"/api/communications/contact/{contact['id']}", headers=auth_headers).get_json()
        assert [c['subject'] for c in listed] == ['2024-02-01', '2024-01-15', '2024-01-01']

    def test_upcoming_only_future(self, client, auth_headers, contact):
        future = (datetime.utcnow() + timedelta(days=3)).isoformat()
        client.post('/api/communications', json={
            'contactId': contact['id'], 'type': 'MEETING', 'date': future, 'subject': 'Onsite',
        }, headers=auth_headers)
        client.post('/api/communications', json={
            'contactId': contact['id'], 'type': 'MEETING', 'date': '2020-01-01T09:00:00', 'subject': 'Old',
        }, headers=auth_headers)

        upcoming = client.get('/api/communications/upcoming', headers=auth_headers).get_json()
        assert [c['subject'] for c in upcoming] == ['Onsite']
        assert upcoming[0]['contact']['name'] == 'Dana Smith'

    def test_follow_up_action_lifecycle(self, client, auth_headers, contact):
        comm = client.post('/api/communications', json={
            'contactId': contact['id'], 'type': 'EMAIL', 'date': '2024-01-01T10:00:00',
        }, headers=auth_headers).get_json()

        created = client.post(f"/api/communications/{comm['id']}/follow-up-actions",
                              json={'description': 'Reply'}, headers=auth_headers)
        assert created.status_code == 201
        action = created.get_json()
        assert action['communicationId'] == comm['id']

        updated = client.put(f"/api/communications/follow-up-actions/{action['id']}",
                             json={'priority': 'LOW'}, headers=auth_headers).get_json()
        assert updated['priority'] == 'LOW'
        assert updated['description'] == 'Reply'

        toggled = client.patch(f"/api/communications/follow-up-actions/{action['id']}/toggle",
                               headers=auth_headers).get_json()
        assert toggled['completed'] is True

        assert client.delete(f"/api/communications/follow-up-actions/{action['id']}",
                             headers=auth_headers).status_code == 204
        fetched = client.get(f"/api/communications/{comm['id']}", headers=auth_headers).get_json()
        assert fetched['followUpActions'] == []

    def test_other_user_cannot_touch_follow_up(self, client, auth_headers, other_headers, contact):
        comm = client.post('/api/communications', json={
            'contactId': contact['id'], 'type': 'EMAIL', 'date': '2024-01-01T10:00:00',
            'followUpActions': [{'description': 'Reply'}],
        }, headers=auth_headers).get_json()
        action_id = comm['followUpActions'][0]['id']

        response = client.patch(f"/api/communications/follow-up-actions/{action_id}/toggle",
                                headers=other_headers)
        assert response.status_code == 404
