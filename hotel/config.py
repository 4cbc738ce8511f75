#!/usr/bin/env python3
#-*- coding:utf-8 -*-

from .db import MetaConnectorAdapter
import os
import json


class ConfigIsNotValidError(Exception):
    def __init__(self, msg, path=()):
        super().__init__(msg)
        self.msg = msg
        self.path_through_conf = list(path)

    def __str__(self):
        path = '.'.join(self.path_through_conf)
        return "{}: {}".format(path, self.msg)

    __repr__ = __str__


class Validator:
    """
    Base of validators. A validator which is not required takes its
    default value when the item is missing.
    """
    def __init__(self, is_required=True, default=None):
        self.is_required = is_required
        self.default = default

    def valid(self, item):
        return item

    def missing(self):
        """
        Value used when the item is absent.
        """
        return self.default


class ChoiceValidator(Validator):
    """
    Valide if item is one of choices.
    """
    def __init__(self, choices, is_required=True, default=None):
        super().__init__(is_required, default)
        self.choices = tuple(choices)

    def valid(self, item):
        if item not in self.choices:
            msg = 'must be one of {}'.format(', '.join(self.choices))
            raise ConfigIsNotValidError(msg)
        return item


class IntValidator(Validator):
    """
    Valide if item is int between min and max.
    By default min is minus infinity and max is infinity
    """

    def __init__(self, int_min=float("-inf"), int_max=float("+inf"), is_required=True, default=None):
        super().__init__(is_required, default)
        self.max = int_max
        self.min = int_min

    def valid(self, item):
        if (not isinstance(item, int) or isinstance(item, bool)
                or not self.max >= item >= self.min):
            msg = 'must be an integer between {s.min} and {s.max}'.format(s=self)
            raise ConfigIsNotValidError(msg)
        return item


class FloatValidator(Validator):
    """
    Valide if item is a number between min and max and give it as float.
    By default min is minus infinity and max is infinity
    """

    def __init__(self, float_min=float("-inf"), float_max=float("+inf"), is_required=True,
                 default=None):
        super().__init__(is_required, default)
        self.min = float_min
        self.max = float_max

    def valid(self, item):
        if (not isinstance(item, (int, float)) or isinstance(item, bool)
                or not self.max >= item >= self.min):
            msg = 'must be a number between {s.min} and {s.max}'.format(s=self)
            raise ConfigIsNotValidError(msg)
        return float(item)


class StrValidator(Validator):

    def valid(self, item):
        if not isinstance(item, str):
            raise ConfigIsNotValidError('must be a string')
        return item


class DictValidator(Validator):

    def __init__(self, children, is_required=True):
        super().__init__(is_required)
        self.children = dict(children)

    def missing(self):
        return self.valid({})

    def valid(self, item):
        if not isinstance(item, dict):
            raise ConfigIsNotValidError('must be a object')

        unexpected = set(item) - set(self.children)
        if unexpected:
            raise ConfigIsNotValidError('unexpected keys ({})'.format(', '.join(sorted(unexpected))))

        clean_children = {}
        for key, validator in self.children.items():
            if key in item:
                try:
                    clean_children[key] = validator.valid(item[key])
                except ConfigIsNotValidError as error:
                    path = [key] + error.path_through_conf
                    raise ConfigIsNotValidError(error.msg, path)
            elif validator.is_required:
                raise ConfigIsNotValidError("is required", [key])
            else:
                clean_children[key] = validator.missing()
        return clean_children


class ConfigReader:
    """
    Read the JSON configuration file the first time an attribute is asked.

    The file is the one named by the HOTEL_CONFIG_FILE environment variable,
    or hotel.json in the working directory. When no file is found defaults
    are used, unless the path was explicitly given.
    """

    DEFAULT_FILE_NAME = 'hotel.json'
    ENVIRON_VAR_NAME = 'HOTEL_CONFIG_FILE'
    VALIDATOR = None

    def __init__(self):
        self._loaded = False

    def reload_config(self, path_to_conf=None):
        self.clear_config()
        explicit = path_to_conf is not None or self.ENVIRON_VAR_NAME in os.environ
        if path_to_conf is None:
            path_to_conf = os.environ.get(
                self.ENVIRON_VAR_NAME, os.path.abspath(self.DEFAULT_FILE_NAME))

        if explicit or os.path.isfile(path_to_conf):
            with open(path_to_conf, 'r') as config_file:
                configuration = json.load(config_file)
            self.path_to_conf = path_to_conf
        else:
            configuration = {}
            self.path_to_conf = None

        if not isinstance(configuration, dict):
            raise ConfigIsNotValidError(
                "'{}' config file must contain a json dict".format(path_to_conf))

        clean = self.VALIDATOR.valid(configuration)

        for key, value in clean.items():
            setattr(self, key, value)
        self._loaded = True

    def clear_config(self):
        for key in list(vars(self)):
            delattr(self, key)
        self._loaded = False

    def __getattr__(self, name):
        if name.startswith('_') or self._loaded:
            raise AttributeError(name)
        self.reload_config()
        return getattr(self, name)


ConfigReader.VALIDATOR = DictValidator(children={
    "database": DictValidator(is_required=False, children={
        "provider": ChoiceValidator(sorted(MetaConnectorAdapter.PROVIDERS),
                                    is_required=False, default='postgresql'),
        "host": StrValidator(is_required=False, default='localhost'),
        "password": StrValidator(is_required=False, default=''),
        "timeout": IntValidator(int_min=1, is_required=False),
    }),
    "search_radius": FloatValidator(float_min=0, is_required=False, default=30.0),
    "history_limit": IntValidator(int_min=1, is_required=False, default=5),
})


config = ConfigReader()
