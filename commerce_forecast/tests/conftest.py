"""
Point the configuration at a throwaway settings file before the package is
imported, so test runs neither write config/ nor logs/ into the working tree.
"""
import configparser
import os
import tempfile

_settings_dir = tempfile.mkdtemp(prefix='commerce_forecast_tests_')
_settings_path = os.path.join(_settings_dir, 'settings.ini')

_settings = configparser.ConfigParser(interpolation=None)
_settings['DATABASE'] = {'url': 'sqlite://', 'echo': 'False'}
_settings['LOGGING'] = {
    'level': 'WARNING',
    'directory': os.path.join(_settings_dir, 'logs'),
    'console_output': 'False',
    'file_output': 'False'
}
_settings['FORECASTING'] = {'default_days_ahead': '30', 'max_days_ahead': '90'}

with open(_settings_path, 'w') as settings_file:
    _settings.write(settings_file)

os.environ.setdefault('COMMERCE_FORECAST_CONFIG', _settings_path)
