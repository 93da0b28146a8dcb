"""
Tests for /api/applications.
"""


class TestApplications:

    def test_create_list_and_filter(self, client, auth_headers):
        company = client.post('/api/companies', json={'name': 'Acme'}, headers=auth_headers).get_json()
        created = client.post('/api/applications', json={
            'position': 'Engineer', 'companyId': company['id'], 'jobUrl': 'https://acme.io/jobs/1',
        }, headers=auth_headers)
        assert created.status_code == 201
        body = created.get_json()
        assert body['status'] == 'APPLIED'
        assert body['companyRef'] == {'id': company['id'], 'name': 'Acme'}

        client.post('/api/applications', json={'position': 'Designer', 'status': 'SAVED'}, headers=auth_headers)

        saved = client.get('/api/applications?status=SAVED', headers=auth_headers).get_json()
        assert [a['position'] for a in saved] == ['Designer']

    def test_task_source_names_application(self, client, auth_headers):
        application = client.post('/api/applications', json={'position': 'Engineer', 'company': 'Legacy Co'},
                                  headers=auth_headers).get_json()
        client.post('/api/tasks', json={'title': 'Prep', 'applicationId': application['id']}, headers=auth_headers)

        item = client.get('/api/tasks/unified', headers=auth_headers).get_json()[0]
        assert item['source'] == {
            'type': 'application', 'id': application['id'], 'name': 'Engineer at Legacy Co',
        }

    def test_update_status_and_delete(self, client, auth_headers):
        application = client.post('/api/applications', json={'position': 'Engineer'},
                                  headers=auth_headers).get_json()

        updated = client.put(f"/api/applications/{application['id']}", json={'status': 'INTERVIEWING'},
                             headers=auth_headers)
        assert updated.get_json()['status'] == 'INTERVIEWING'

        assert client.put(f"/api/applications/{application['id']}", json={'status': 'GHOSTED'},
                          headers=auth_headers).status_code == 400

        assert client.delete(f"/api/applications/{application['id']}", headers=auth_headers).status_code == 204
        assert client.get(f"/api/applications/{application['id']}", headers=auth_headers).status_code == 404

    def test_foreign_company_rejected(self, client, auth_headers, other_headers):
        company = client.post('/api/companies', json={'name': 'Acme'}, headers=other_headers).get_json()
        response = client.post('/api/applications', json={'position': 'Engineer', 'companyId': company['id']},
                               headers=auth_headers)
        assert response.status_code == 404
