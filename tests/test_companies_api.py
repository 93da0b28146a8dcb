"""
Tests for /api/companies.
"""


def create_company(client, headers, **fields):
    payload = {'name': 'Acme'}
    payload.update(fields)
    return client.post('/api/companies', json=payload, headers=headers)


class TestCompanyUniqueness:

    def test_duplicate_name_for_same_user_rejected(self, client, auth_headers):
        assert create_company(client, auth_headers).status_code == 201

        response = create_company(client, auth_headers)
        assert response.status_code == 400
        assert response.get_json() == {'error': 'Company with this name already exists'}

    def test_same_name_for_another_user_allowed(self, client, auth_headers, other_headers):
        assert create_company(client, auth_headers).status_code == 201
        assert create_company(client, other_headers).status_code == 201

    def test_rename_onto_existing_name_rejected(self, client, auth_headers):
        create_company(client, auth_headers, name='Acme')
        globex = create_company(client, auth_headers, name='Globex').get_json()

        response = client.put(f"/api/companies/{globex['id']}", json={'name': 'Acme'}, headers=auth_headers)
        assert response.status_code == 400

    def test_rename_to_own_name_is_fine(self, client, auth_headers):
        acme = create_company(client, auth_headers).get_json()
        response = client.put(f"/api/companies/{acme['id']}", json={'name': 'Acme', 'industry': 'Tools'},
                              headers=auth_headers)
        assert response.status_code == 200
        assert response.get_json()['industry'] == 'Tools'


class TestCompanyDeletion:

    def test_delete_unused_company(self, client, auth_headers):
        acme = create_company(client, auth_headers).get_json()
        assert client.delete(f"/api/companies/{acme['id']}", headers=auth_headers).status_code == 204
        assert client.get(f"/api/companies/{acme['id']}", headers=auth_headers).status_code == 404

    def test_delete_with_contact_refused(self, client, auth_headers):
        acme = create_company(client, auth_headers).get_json()
        client.post('/api/contacts', json={'name': 'Pat', 'companyId': acme['id']}, headers=auth_headers)

        response = client.delete(f"/api/companies/{acme['id']}", headers=auth_headers)
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Cannot delete company with existing applications or contacts'

    def test_delete_with_application_refused(self, client, auth_headers):
        acme = create_company(client, auth_headers).get_json()
        client.post('/api/applications', json={'position': 'Engineer', 'companyId': acme['id']},
                    headers=auth_headers)

        assert client.delete(f"/api/companies/{acme['id']}", headers=auth_headers).status_code == 400

    def test_delete_removes_company_research(self, client, auth_headers):
        acme = create_company(client, auth_headers).get_json()
        client.post('/api/research', json={
            'title': 'Funding', 'target': {'kind': 'COMPANY', 'id': acme['id']}
        }, headers=auth_headers)

        client.delete(f"/api/companies/{acme['id']}", headers=auth_headers)
        assert client.get('/api/research', headers=auth_headers).get_json() == []


class TestCompanyListing:

    def test_ordered_by_status_rank_then_name(self, client, auth_headers):
        create_company(client, auth_headers, name='Zeta', status='OPPORTUNITY')
        create_company(client, auth_headers, name='Beta', status='ARCHIVED')
        create_company(client, auth_headers, name='Alpha', status='TARGET')
        create_company(client, auth_headers, name='Aardvark')
        create_company(client, auth_headers, name='Able', status='OPPORTUNITY')

        names = [c['name'] for c in client.get('/api/companies', headers=auth_headers).get_json()]
        assert names == ['Able', 'Zeta', 'Alpha', 'Beta', 'Aardvark']

    def test_counts_and_filters(self, client, auth_headers):
        acme = create_company(client, auth_headers, industry='Robotics', size='SMALL').get_json()
        create_company(client, auth_headers, name='Globex', industry='Energy')
        client.post('/api/contacts', json={'name': 'Pat', 'companyId': acme['id']}, headers=auth_headers)

        listed = client.get('/api/companies?industry=Robotics', headers=auth_headers).get_json()
        assert [c['name'] for c in listed] == ['Acme']
        assert listed[0]['counts'] == {'applications': 0, 'contacts': 1}

        searched = client.get('/api/companies?search=glob', headers=auth_headers).get_json()
        assert [c['name'] for c in searched] == ['Globex']

    def test_detail_includes_contacts_and_applications(self, client, auth_headers):
        acme = create_company(client, auth_headers).get_json()
        client.post('/api/contacts', json={'name': 'Pat', 'companyId': acme['id']}, headers=auth_headers)
        client.post('/api/applications', json={'position': 'Engineer', 'companyId': acme['id']},
                    headers=auth_headers)

        detail = client.get(f"/api/companies/{acme['id']}", headers=auth_headers).get_json()
        assert [c['name'] for c in detail['contacts']] == ['Pat']
        assert [a['position'] for a in detail['applications']] == ['Engineer']

    def test_other_users_company_not_found(self, client, auth_headers, other_headers):
        acme = create_company(client, auth_headers).get_json()
        assert client.get(f"/api/companies/{acme['id']}", headers=other_headers).status_code == 404


class TestCompanyValidation:

    def test_bad_website_rejected(self, client, auth_headers):
        assert create_company(client, auth_headers, website='not a url').status_code == 400

    def test_founded_out_of_range_rejected(self, client, auth_headers):
        assert create_company(client, auth_headers, founded=1700).status_code == 400

    def test_unknown_status_rejected(self, client, auth_headers):
        assert create_company(client, auth_headers, status='HOT').status_code == 400


class TestFindOrCreate:

    def test_creates_then_reuses(self, client, auth_headers):
        first = client.post('/api/companies/find-or-create', json={'name': 'Initech'}, headers=auth_headers)
        second = client.post('/api/companies/find-or-create', json={'name': 'Initech'}, headers=auth_headers)

        assert first.status_code == 200
        assert first.get_json()['id'] == second.get_json()['id']
        assert len(client.get('/api/companies', headers=auth_headers).get_json()) == 1
