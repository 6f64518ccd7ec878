import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

import requests

import run_world_timezones
from world_timezones.config_loader import MapSettings
from world_timezones.models import TimezoneFeature


def make_features():
    geometry = {'type': 'Polygon', 'coordinates': [[[0, 0], [15, 0], [15, 10], [0, 0]]]}
    return [
        TimezoneFeature(zone='0', geometry=geometry, properties={'zone': '0'}),
        TimezoneFeature(zone='5.5', geometry=geometry, properties={'zone': '5.5'}),
        TimezoneFeature(zone='bad', geometry=geometry, properties={'zone': 'bad'}),
    ]


class MainScriptTests(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.output = os.path.join(self.tmpdir.name, 'index.html')

    def tearDown(self):
        self.tmpdir.cleanup()

    def _settings(self, **overrides):
        values = dict(timezone_name='Asia/Kolkata', output_file=self.output, open_browser=False)
        values.update(overrides)
        return MapSettings(**values)

    @patch('run_world_timezones.open_in_browser')
    @patch('run_world_timezones.NaturalEarthClient')
    @patch('run_world_timezones.load_config')
    def test_builds_map_file(self, mock_load_config, mock_client_cls, mock_open):
        mock_load_config.return_value = self._settings()
        mock_client_cls.return_value.get_timezone_features.return_value = make_features()

        out = io.StringIO()
        with redirect_stdout(out):
            run_world_timezones.main()

        self.assertTrue(os.path.exists(self.output))
        mock_open.assert_not_called()
        printed = out.getvalue()
        self.assertIn('Your timezone: Asia/Kolkata', printed)
        self.assertIn('UTC offset: +5.5 hours', printed)
        self.assertIn('Skipped 1 features', printed)
        self.assertIn('1 matching your offset', printed)

    @patch('run_world_timezones.open_in_browser')
    @patch('run_world_timezones.NaturalEarthClient')
    @patch('run_world_timezones.load_config')
    def test_opens_browser_when_enabled(self, mock_load_config, mock_client_cls, mock_open):
        mock_load_config.return_value = self._settings(open_browser=True)
        mock_client_cls.return_value.get_timezone_features.return_value = make_features()

        with redirect_stdout(io.StringIO()):
            run_world_timezones.main()

        mock_open.assert_called_once()
        self.assertEqual(str(mock_open.call_args.args[0]), os.path.realpath(self.output))

    @patch('run_world_timezones.NaturalEarthClient')
    @patch('run_world_timezones.load_config', side_effect=ValueError('bad zoom'))
    def test_configuration_error_stops_before_fetching(self, mock_load_config, mock_client_cls):
        out = io.StringIO()
        with redirect_stdout(out):
            run_world_timezones.main()

        self.assertIn('Configuration Error', out.getvalue())
        mock_client_cls.assert_not_called()

    @patch('run_world_timezones.NaturalEarthClient')
    @patch('run_world_timezones.load_config')
    def test_fetch_failure_aborts_without_output(self, mock_load_config, mock_client_cls):
        mock_load_config.return_value = self._settings()
        mock_client_cls.return_value.get_timezone_features.side_effect = requests.ConnectionError('offline')

        with redirect_stdout(io.StringIO()):
            with self.assertRaises(requests.ConnectionError):
                run_world_timezones.main()

        self.assertFalse(os.path.exists(self.output))

    @patch('run_world_timezones.NaturalEarthClient')
    @patch('run_world_timezones.load_config')
    def test_unknown_timezone_falls_back_to_utc(self, mock_load_config, mock_client_cls):
        mock_load_config.return_value = self._settings(timezone_name='Mars/Olympus_Mons')
        mock_client_cls.return_value.get_timezone_features.return_value = make_features()

        out = io.StringIO()
        with redirect_stdout(out):
            run_world_timezones.main()

        printed = out.getvalue()
        self.assertIn("Unknown timezone 'Mars/Olympus_Mons', using UTC", printed)
        self.assertIn('UTC offset: +0 hours', printed)


if __name__ == '__main__':
    unittest.main()
