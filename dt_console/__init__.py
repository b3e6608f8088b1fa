import os
import tomllib
from pathlib import Path


class Configurator:
    """Console settings: status endpoint, poll interval, query service and table paging.

    Read from config_default.toml, then a local config.toml (or CONSOLE_SETTINGS),
    then environment variables of the same name. Accessed as config.VALUE.
    """

    configuration = None

    def __init__(self):
        if not self.configuration:
            self.configure()

    def configure(self):
        # load default settings
        with open(Path(__file__).parent / "config_default.toml", "rb") as f:
            configuration = tomllib.load(f)

        # override with local settings
        local_settings = os.environ.get("CONSOLE_SETTINGS", Path.cwd() / "config.toml")
        if Path(local_settings).exists():
            with open(local_settings, "rb") as f:
                configuration.update(tomllib.load(f))

        # override with os env settings
        for config_key in configuration:
            if config_key in os.environ:
                value = os.getenv(config_key)
                # Casting env value
                if isinstance(configuration[config_key], list):
                    value = value.split(",")
                    if all(isinstance(v, int) for v in configuration[config_key]):
                        value = [int(v) for v in value]
                elif isinstance(configuration[config_key], bool):
                    value = value.lower() in ["true", "1", "t", "y", "yes"]
                elif isinstance(configuration[config_key], int):
                    value = int(value)
                elif isinstance(configuration[config_key], float):
                    value = float(value)
                configuration[config_key] = value

        self.configuration = configuration
        self.check()

    def override(self, **kwargs):
        self.configuration.update(kwargs)
        self.check()

    def check(self):
        """Sanity check on config"""
        # Make sure QUERY_ENDPOINT has a scheme
        if not self.configuration["QUERY_ENDPOINT"].startswith("http"):
            self.configuration["QUERY_ENDPOINT"] = f"http://{self.configuration['QUERY_ENDPOINT']}"
        if self.configuration["PAGE_SIZE_DEFAULT"] > self.configuration["PAGE_SIZE_MAX"]:
            raise ValueError("PAGE_SIZE_DEFAULT cannot exceed PAGE_SIZE_MAX")

    def __getattr__(self, __name):
        return self.configuration.get(__name)

    @property
    def __dict__(self):
        return self.configuration


config = Configurator()
