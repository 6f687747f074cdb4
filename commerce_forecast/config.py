import os
import configparser
from pathlib import Path

from commerce_forecast.exceptions import ConfigError

CONFIG_PATH_ENV = 'COMMERCE_FORECAST_CONFIG'

class Config:
    """Configuration manager for Commerce Forecast."""

    _instance = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the configuration if not already initialized."""
        if self._initialized:
            return

        self._config_path = Path(os.environ.get(CONFIG_PATH_ENV, 'config/settings.ini'))
        self._config_dir = self._config_path.parent
        self._config = configparser.ConfigParser(interpolation=None)

        # Load config or create default
        if self._config_path.exists():
            try:
                self._config.read(self._config_path)
            except configparser.Error as e:
                raise ConfigError(f"Cannot read {self._config_path}: {str(e)}")
        else:
            self._create_default_config()

        self._initialized = True

    def _create_default_config(self):
        """Create default configuration file."""
        self._config['DATABASE'] = {
            'url': 'sqlite:///commerce_forecast.db',
            'echo': 'False',
            'pool_size': '10',
            'max_overflow': '20',
            'pool_timeout': '30',
            'pool_recycle': '1800'
        }

        self._config['LOGGING'] = {
            'level': 'INFO',
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'directory': 'logs',
            'max_size_mb': '10',
            'backup_count': '5',
            'console_output': 'True',
            'file_output': 'True'
        }

        self._config['FORECASTING'] = {
            'default_days_ahead': '30',
            'max_days_ahead': '90'
        }

        self._config['DASHBOARD'] = {
            'predicted_revenue_window_days': '30',
            'recent_sales_limit': '10',
            'recent_alerts_limit': '5'
        }

        self._save_config()

    def _save_config(self):
        """Save configuration to file."""
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
            with open(self._config_path, 'w') as configfile:
                self._config.write(configfile)
        except OSError as e:
            raise ConfigError(f"Cannot write {self._config_path}: {str(e)}")

    def get(self, section, key, default=None):
        """Get configuration value."""
        try:
            return self._config.get(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError):
            return default

    def get_int(self, section, key, default=None):
        """Get configuration value as integer."""
        try:
            return self._config.getint(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return default

    def get_boolean(self, section, key, default=None):
        """Get configuration value as boolean."""
        try:
            return self._config.getboolean(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return default

    def get_db_url(self):
        """Get the SQLAlchemy database URL."""
        return self.get('DATABASE', 'url', 'sqlite:///commerce_forecast.db')

    @property
    def log_config(self):
        """Get logging configuration."""
        return {
            'level': self.get('LOGGING', 'level', 'INFO'),
            'format': self.get('LOGGING', 'format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
            'directory': self.get('LOGGING', 'directory', 'logs'),
            'max_size_mb': self.get_int('LOGGING', 'max_size_mb', 10),
            'backup_count': self.get_int('LOGGING', 'backup_count', 5),
            'console_output': self.get_boolean('LOGGING', 'console_output', True),
            'file_output': self.get_boolean('LOGGING', 'file_output', True)
        }

    @property
    def forecast_config(self):
        """Get forecasting configuration."""
        return {
            'default_days_ahead': self.get_int('FORECASTING', 'default_days_ahead', 30),
            'max_days_ahead': self.get_int('FORECASTING', 'max_days_ahead', 90)
        }

    @property
    def dashboard_config(self):
        """Get dashboard configuration."""
        return {
            'predicted_revenue_window_days': self.get_int('DASHBOARD', 'predicted_revenue_window_days', 30),
            'recent_sales_limit': self.get_int('DASHBOARD', 'recent_sales_limit', 10),
            'recent_alerts_limit': self.get_int('DASHBOARD', 'recent_alerts_limit', 5)
        }

# Global config instance
config = Config()
