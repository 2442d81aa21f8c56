import os
import pathlib
import tomllib

CONFIG_FILENAME = 'config.toml'
CONFIG_ENV_VAR = 'NIGHTCALC_CONFIG'
SELF_DIR = pathlib.Path(__file__).parent.resolve()

CONFIG_SCHEMA = {
    'airports': {
        'data_file': {'default': None},
        'source_url': {
            'default': 'https://raw.githubusercontent.com/jpatokal/openflights/master/data/airports.dat'},
        'timeout': {'default': 30},
    },
    'night': {
        'depression': {'default': 6},
        'segments': {'default': 200},
    },
    'log': {
        'debug': {'default': False},
    },
}


class ConfigError(Exception):
    pass


class Config:
    def __init__(self, config_file=None):
        if config_file is None:
            config_file = os.environ.get(CONFIG_ENV_VAR) or SELF_DIR / CONFIG_FILENAME

        self.config_file = pathlib.Path(config_file)

    def get_config_dict(self):
        try:
            with open(self.config_file, 'rb') as f:
                return tomllib.load(f)
        except FileNotFoundError:
            return {}

    def gimme(self, lookup):
        cfg = self.get_config_dict()
        parts = lookup.split('.')

        if len(parts) == 2:
            section, key = parts

            try:
                schema = CONFIG_SCHEMA[section][key]
            except KeyError:
                raise ConfigError(f'not a valid config lookup: {lookup}')

            try:
                return cfg[section][key]
            except KeyError:
                pass

            try:
                return schema['default']
            except KeyError:
                raise ConfigError(f'config key is required: {lookup}')

        raise ConfigError(f'not a valid config lookup: {lookup}')


config = Config()
