import os
import tempfile
import unittest

from world_timezones.api_client import DEFAULT_TIMEZONES_URL
from world_timezones.config_loader import ConfigLoader, load_config, parse_bool


class ConfigLoaderEnvTests(unittest.TestCase):
    def setUp(self):
        self.env_keys = [
            'WORLD_TZ_TIMEZONE',
            'WORLD_TZ_DATASET_URL',
            'WORLD_TZ_OUTPUT_FILE',
            'WORLD_TZ_OPEN_BROWSER',
            'WORLD_TZ_INVALID_ZONE_POLICY',
            'WORLD_TZ_REQUEST_TIMEOUT',
            'WORLD_TZ_MAP_STYLE',
            'WORLD_TZ_ZOOM',
            'WORLD_TZ_CENTER_LATITUDE',
        ]
        self.original_env = {k: os.environ.get(k) for k in self.env_keys}
        for key in self.env_keys:
            os.environ.pop(key, None)

    def tearDown(self):
        for key, value in self.original_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value

    def test_defaults_without_file_or_env(self):
        loader = ConfigLoader(config_file='config-does-not-exist.ini')
        self.assertFalse(loader.load_from_file())

        settings = loader.get_settings()

        self.assertIsNone(settings.timezone_name)
        self.assertEqual(settings.dataset_url, DEFAULT_TIMEZONES_URL)
        self.assertEqual(settings.output_file, 'index.html')
        self.assertTrue(settings.open_browser)
        self.assertEqual(settings.invalid_zone_policy, 'skip')
        self.assertEqual(settings.request_timeout, 60)
        self.assertEqual(settings.map_style, 'carto-darkmatter')
        self.assertEqual(settings.zoom, 3)
        self.assertEqual(settings.center_latitude, 30)

    def test_env_values_are_parsed(self):
        os.environ['WORLD_TZ_TIMEZONE'] = 'Asia/Kolkata'
        os.environ['WORLD_TZ_OUTPUT_FILE'] = 'out/map.html'
        os.environ['WORLD_TZ_OPEN_BROWSER'] = 'no'
        os.environ['WORLD_TZ_INVALID_ZONE_POLICY'] = 'ZERO'
        os.environ['WORLD_TZ_REQUEST_TIMEOUT'] = '15'
        os.environ['WORLD_TZ_ZOOM'] = '2.5'

        settings = ConfigLoader(config_file='config-does-not-exist.ini').get_settings()

        self.assertEqual(settings.timezone_name, 'Asia/Kolkata')
        self.assertEqual(settings.output_file, 'out/map.html')
        self.assertFalse(settings.open_browser)
        self.assertEqual(settings.invalid_zone_policy, 'zero')
        self.assertEqual(settings.request_timeout, 15)
        self.assertEqual(settings.zoom, 2.5)

    def test_env_invalid_values_raise(self):
        os.environ['WORLD_TZ_OPEN_BROWSER'] = 'maybe'
        with self.assertRaises(ValueError):
            ConfigLoader(config_file='config-does-not-exist.ini').get_settings()

        os.environ['WORLD_TZ_OPEN_BROWSER'] = 'true'
        os.environ['WORLD_TZ_ZOOM'] = 'far'
        with self.assertRaises(ValueError):
            ConfigLoader(config_file='config-does-not-exist.ini').get_settings()

        os.environ.pop('WORLD_TZ_ZOOM')
        os.environ['WORLD_TZ_INVALID_ZONE_POLICY'] = 'guess'
        with self.assertRaises(ValueError):
            ConfigLoader(config_file='config-does-not-exist.ini').get_settings()

    def test_parse_bool_words(self):
        for value in ('1', 'TRUE', 'yes', ' on '):
            self.assertTrue(parse_bool(value, 'flag'))
        for value in ('0', 'False', 'NO', 'off'):
            self.assertFalse(parse_bool(value, 'flag'))


class ConfigLoaderFileTests(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.config_path = os.path.join(self.tmpdir.name, 'config.ini')

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, content):
        with open(self.config_path, 'w', encoding='utf-8') as f:
            f.write(content)

    def test_map_section_overrides_defaults(self):
        self._write(
            "[Map]\n"
            "timezone = Europe/Paris\n"
            "output_file = paris.html\n"
            "open_browser = false\n"
            "invalid_zone_policy = zero\n"
            "center_latitude = 45\n"
        )

        settings = load_config(self.config_path)

        self.assertEqual(settings.timezone_name, 'Europe/Paris')
        self.assertEqual(settings.output_file, 'paris.html')
        self.assertFalse(settings.open_browser)
        self.assertEqual(settings.invalid_zone_policy, 'zero')
        self.assertEqual(settings.center_latitude, 45)
        self.assertEqual(settings.zoom, 3)

    def test_blank_timezone_means_detect(self):
        self._write("[Map]\ntimezone =\n")

        self.assertIsNone(load_config(self.config_path).timezone_name)

    def test_invalid_file_values_raise(self):
        self._write("[Map]\nzoom = far\n")

        with self.assertRaises(ValueError) as ctx:
            load_config(self.config_path)
        self.assertIn('Invalid config file', str(ctx.exception))

    def test_zero_timeout_is_rejected(self):
        self._write("[Map]\nrequest_timeout = 0\n")

        with self.assertRaises(ValueError):
            load_config(self.config_path)


if __name__ == '__main__':
    unittest.main()
