# adapted from pyro - https://github.com/irmen/Pyro5 - see following license
"""
MIT License

Copyright (c) Irmen de Jong

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""
import os
import typing 
import logging
import warnings
import msgspec


class Configuration:
    """
    Allows to auto apply common settings used throughout the package,
    instead of passing these settings as arguments. Import ``global_config`` variable
    instead of instantitation this class. 

    Supports loading configuration from a JSON file whose path is specified 
    under environment variable WOT_ADAPTER_CONFIG. 

    Values are mutable in runtime and not type checked. Keys of JSON file 
    must correspond to supported value name. Supported values are - 

    CANCEL_TIMEOUT - seconds to wait for the remote thing to acknowledge the cancellation 
    of a single subscription during device teardown. None waits indefinitely. default 5.

    LOG_LEVEL - log level of the loggers created by the package. default logging.INFO.

    validate_schemas - check the data schemas of the Thing Description against the JSON schema 
    meta schema when building devices. Malformed affordances are skipped. default True.

    validate_schema_on_client - validate written property values and action inputs against 
    the Thing Description before sending them to the remote thing. default False.

    Parameters
    ----------
    use_environment: bool
        load files from JSON file specified under environment
    """

    __slots__ = [
        # teardown
        "CANCEL_TIMEOUT",
        # logging
        "LOG_LEVEL",
        # schema
        "validate_schemas", "validate_schema_on_client"
    ]

    def __init__(self, use_environment : bool = False):
        self.load_variables(use_environment)

    def load_variables(self, use_environment : bool = False):
        """
        set default values & use the values from environment file. 
        Set use_environment to False to not use environment file. 
        """
        self.CANCEL_TIMEOUT = 5
        self.LOG_LEVEL = logging.INFO
        self.validate_schemas = True 
        self.validate_schema_on_client = False

        if not use_environment:
            return 
        # environment variables overwrite config items
        file = os.environ.get("WOT_ADAPTER_CONFIG", None)
        if not file:
            warnings.warn("no environment file found although asked to load from one", UserWarning)
            return
        with open(file, "rb") as file:
            config = msgspec.json.decode(file.read()) # type: typing.Dict
        for item, value in config.items():
            setattr(self, item, value)

    def copy(self):
        "returns a copy of this config as another object"
        other = object.__new__(Configuration)
        for item in self.__slots__:
            setattr(other, item, getattr(self, item))
        return other

    def asdict(self):
        "returns this config as a regular dictionary"
        return {item: getattr(self, item) for item in self.__slots__}


global_config = Configuration()


__all__ = ['global_config', 'Configuration']
