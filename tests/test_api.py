import os
import unittest
from unittest import mock

import fiscal.api.server as server
from fiscal.api.server import app
from fiscal.calendar.errors import NotConfigured


class TestAPIConvert(unittest.TestCase):
    def setUp(self):
        app.testing = True
        app.config['API_KEY'] = None
        app.config['RATE_LIMIT_N'] = 0
        app.config['RATE_LIMIT_WINDOW_SEC'] = 1.0
        server._recent.clear()
        self.client = app.test_client()

    def test_convert_date(self):
        rv = self.client.post('/convert', json={'input': '2015-04-15', 'from': 'date', 'to': 'week ending'})
        self.assertEqual(rv.status_code, 200)
        self.assertEqual(rv.get_json(), {'result': '2015-04-18'})

    def test_convert_list(self):
        rv = self.client.post('/convert', json={
            'input': ['01.2018', '02.2018', '03.2018'], 'from': 'Fiscal Week', 'to': 'WEEK ENDING',
        })
        self.assertEqual(rv.status_code, 200)
        self.assertEqual(rv.get_json()['result'], ['2018-01-06', '2018-01-13', '2018-01-20'])

    def test_convert_fiscal_year_and_week(self):
        rv = self.client.post('/convert', json={'input': '2015-06-01', 'from': 'date', 'to': 'fiscal year'})
        self.assertEqual(rv.get_json()['result'], 2015)
        rv = self.client.post('/convert', json={'input': '2014-01-01', 'from': 'date', 'to': 'fiscal week'})
        self.assertEqual(rv.get_json()['result'], '53.2013')

    def test_missing_fields(self):
        rv = self.client.post('/convert', json={'input': '2015-04-15', 'from': 'date'})
        self.assertEqual(rv.status_code, 400)
        self.assertEqual(rv.get_json().get('error'), 'to is required')

    def test_calendar_errors(self):
        cases = [
            ({'input': '2022-01-01', 'from': 'date', 'to': 'fiscal year'}, 'out_of_range'),
            ({'input': '2015/04/15', 'from': 'date', 'to': 'fiscal year'}, 'malformed_input'),
            ({'input': '01.2018', 'from': 'fiscal week', 'to': 'fiscal year'}, 'invalid_direction'),
        ]
        for payload, kind in cases:
            rv = self.client.post('/convert', json=payload)
            self.assertEqual(rv.status_code, 400, payload)
            body = rv.get_json()
            self.assertEqual(body['error'], kind)
            self.assertTrue(body['message'])

    def test_not_configured_is_server_error(self):
        with mock.patch.object(server, 'convert', side_effect=NotConfigured('no offset configured for year 2019')):
            rv = self.client.post('/convert', json={'input': '2019-01-01', 'from': 'date', 'to': 'fiscal week'})
        self.assertEqual(rv.status_code, 500)
        self.assertEqual(rv.get_json()['error'], 'not_configured')

    def test_body_must_be_object(self):
        rv = self.client.post('/convert', json=['2015-04-15'])
        self.assertEqual(rv.status_code, 400)
        self.assertEqual(rv.get_json().get('error'), 'request body must be a JSON object')

    def test_unreadable_calendar_file(self):
        with mock.patch.dict(os.environ, {'FISCAL_CALENDAR_PATH': '/nonexistent/calendar.json'}):
            rv = self.client.post('/convert', json={'input': '2015-04-15', 'from': 'date', 'to': 'fiscal week'})
        self.assertEqual(rv.status_code, 500)
        self.assertEqual(rv.get_json()['error'], 'not_configured')


class TestAPICalendar(unittest.TestCase):
    def setUp(self):
        app.testing = True
        app.config['API_KEY'] = None
        self.client = app.test_client()

    def test_calendar_csv(self):
        rv = self.client.get('/calendar.csv?start=2018-01-01&end=2018-01-07')
        self.assertEqual(rv.status_code, 200)
        self.assertEqual(rv.mimetype, 'text/csv')
        lines = rv.get_data(as_text=True).splitlines()
        self.assertEqual(len(lines), 8)
        self.assertIn('date,week_beginning,week_ending', lines[0])

    def test_calendar_csv_requires_bounds(self):
        rv = self.client.get('/calendar.csv?start=2018-01-01')
        self.assertEqual(rv.status_code, 400)
        rv = self.client.get('/calendar.csv?start=2018-01-01&end=2030-01-01')
        self.assertEqual(rv.status_code, 400)
        self.assertEqual(rv.get_json()['error'], 'out_of_range')

    def test_calendar_config(self):
        rv = self.client.get('/calendar/config')
        self.assertEqual(rv.status_code, 200)
        body = rv.get_json()
        self.assertEqual(body['offsets']['2019'], 2)
        self.assertEqual(body['years_with_53_weeks'], [2013, 2019])
        self.assertEqual(body['max_date'], '2021-12-31')


if __name__ == '__main__':
    unittest.main()
