"""
Tests for /api/research and its links.
"""
import pytest


@pytest.fixture
def company(client, auth_headers):
    return client.post('/api/companies', json={'name': 'Acme'}, headers=auth_headers).get_json()


def create_research(client, headers, **fields):
    payload = {'title': 'Culture notes'}
    payload.update(fields)
    return client.post('/api/research', json=payload, headers=headers)


class TestResearchTargets:

    def test_company_target(self, client, auth_headers, company):
        response = create_research(client, auth_headers, type='COMPANY',
                                   target={'kind': 'COMPANY', 'id': company['id']})
        assert response.status_code == 201
        assert response.get_json()['target'] == {'kind': 'COMPANY', 'id': company['id']}

        by_company = client.get(f"/api/companies/{company['id']}/research", headers=auth_headers).get_json()
        assert [r['title'] for r in by_company] == ['Culture notes']
        by_route = client.get(f"/api/research/company/{company['id']}", headers=auth_headers).get_json()
        assert [r['title'] for r in by_route] == ['Culture notes']

    def test_missing_target_rejected(self, client, auth_headers):
        response = create_research(client, auth_headers, target={'kind': 'CONTACT', 'id': 'nope'})
        assert response.status_code == 404
        assert response.get_json()['error'] == 'Research target not found'

    def test_foreign_target_rejected(self, client, other_headers, company):
        response = create_research(client, other_headers, target={'kind': 'COMPANY', 'id': company['id']})
        assert response.status_code == 404

    def test_unknown_kind_rejected(self, client, auth_headers, company):
        response = create_research(client, auth_headers, target={'kind': 'PLANET', 'id': company['id']})
        assert response.status_code == 400

    def test_untargeted_research(self, client, auth_headers):
        body = create_research(client, auth_headers, type='INDUSTRY').get_json()
        assert body['target'] is None

    def test_retarget_and_clear(self, client, auth_headers, company):
        contact = client.post('/api/contacts', json={'name': 'Dana'}, headers=auth_headers).get_json()
        research = create_research(client, auth_headers, target={'kind': 'COMPANY', 'id': company['id']}).get_json()

        moved = client.put(f"/api/research/{research['id']}", json={'target': {'kind': 'CONTACT', 'id': contact['id']}},
                           headers=auth_headers).get_json()
        assert moved['target'] == {'kind': 'CONTACT', 'id': contact['id']}

        cleared = client.put(f"/api/research/{research['id']}", json={'target': None},
                             headers=auth_headers).get_json()
        assert cleared['target'] is None
        assert cleared['title'] == 'Culture notes'


class TestResearchFields:

    def test_tags_deduplicated_and_findings_ordered(self, client, auth_headers):
        body = create_research(client, auth_headers, tags=['remote', 'ai', 'remote'],
                               findings=['Series B', 'Hiring fast']).get_json()
        assert body['tags'] == ['remote', 'ai']
        assert body['findings'] == ['Series B', 'Hiring fast']

    def test_filter_by_tags_and_type(self, client, auth_headers):
        create_research(client, auth_headers, title='One', tags=['remote'], type='COMPANY')
        create_research(client, auth_headers, title='Two', tags=['onsite'], type='INDUSTRY')
        create_research(client, auth_headers, title='Three', tags=['ai', 'remote'], type='INDUSTRY')

        tagged = client.get('/api/research?tags=remote', headers=auth_headers).get_json()
        assert sorted(r['title'] for r in tagged) == ['One', 'Three']

        both = client.get('/api/research?tags=remote&type=INDUSTRY', headers=auth_headers).get_json()
        assert [r['title'] for r in both] == ['Three']

        either = client.get('/api/research?tags=onsite,ai', headers=auth_headers).get_json()
        assert sorted(r['title'] for r in either) == ['Three', 'Two']

    def test_update_keeps_unsent_fields(self, client, auth_headers):
        research = create_research(client, auth_headers, summary='Short', tags=['a']).get_json()
        updated = client.put(f"/api/research/{research['id']}", json={'importance': 'HIGH'},
                             headers=auth_headers).get_json()
        assert updated['importance'] == 'HIGH'
        assert updated['summary'] == 'Short'
        assert updated['tags'] == ['a']


class TestResearchLinks:

    def test_link_lifecycle(self, client, auth_headers):
        research = create_research(client, auth_headers).get_json()

        created = client.post(f"/api/research/{research['id']}/links", json={
            'title': 'Glassdoor', 'url': 'https://glassdoor.com/acme', 'type': 'GLASSDOOR',
        }, headers=auth_headers)
        assert created.status_code == 201
        link = created.get_json()

        updated = client.put(f"/api/research/{research['id']}/links/{link['id']}",
                             json={'title': 'Reviews'}, headers=auth_headers).get_json()
        assert updated['title'] == 'Reviews'
        assert updated['url'] == 'https://glassdoor.com/acme'

        fetched = client.get(f"/api/research/{research['id']}", headers=auth_headers).get_json()
        assert [l['title'] for l in fetched['links']] == ['Reviews']

        assert client.delete(f"/api/research/{research['id']}/links/{link['id']}",
                             headers=auth_headers).status_code == 204

    def test_invalid_link_url_rejected(self, client, auth_headers):
        research = create_research(client, auth_headers).get_json()
        response = client.post(f"/api/research/{research['id']}/links",
                               json={'title': 'x', 'url': 'ftp//bad'}, headers=auth_headers)
        assert response.status_code == 400

    def test_link_of_other_research_not_found(self, client, auth_headers):
        first = create_research(client, auth_headers, title='First').get_json()
        second = create_research(client, auth_headers, title='Second').get_json()
        link = client.post(f"/api/research/{first['id']}/links",
                           json={'title': 'x', 'url': 'https://example.com'}, headers=auth_headers).get_json()

        response = client.delete(f"/api/research/{second['id']}/links/{link['id']}", headers=auth_headers)
        assert response.status_code == 404

    def test_delete_research_removes_links(self, client, auth_headers):
        research = create_research(client, auth_headers).get_json()
        client.post(f"/api/research/{research['id']}/links",
                    json={'title': 'x', 'url': 'https://example.com'}, headers=auth_headers)

        assert client.delete(f"/api/research/{research['id']}", headers=auth_headers).status_code == 204
        assert client.get(f"/api/research/{research['id']}", headers=auth_headers).status_code == 404
