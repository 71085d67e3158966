"""
tokenbasic - config.py
Configuration file and command-line options parser

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import io
import os
import sys
import logging
import configparser
from collections import deque


# default config file name, looked for in the current directory
CONFIG_NAME = u'TOKENBASIC.INI'

# section of the config file holding our options
DEFAULT_SECTION = u'tokenbasic'

# format for log files
LOGGING_FORMAT = u'[%(asctime)s.%(msecs)04d] %(levelname)s: %(message)s'
LOGGING_FORMATTER = logging.Formatter(fmt=LOGGING_FORMAT, datefmt=u'%H:%M:%S')

# bool strings
TRUES = (u'YES', u'TRUE', u'ON', u'1')
FALSES = (u'NO', u'FALSE', u'OFF', u'0')

# escape sequences accepted in the line-ending option
LINE_ENDING_ESCAPES = ((u'\\r', u'\r'), (u'\\n', u'\n'), (u'\\t', u'\t'))


##############################################################################
# long-form arguments

ARGUMENTS = {
    u'lex': {u'type': u'bool', u'default': False, },
    u'trace': {u'type': u'bool', u'default': False, },
    u'version': {u'type': u'bool', u'default': False, },
    u'help': {u'type': u'bool', u'default': False, },
    u'debug': {u'type': u'bool', u'default': False, },
    u'logfile': {u'type': u'string', u'default': u'', },
    u'config': {u'type': u'string', u'default': u'', },
    u'timeout': {u'type': u'float', u'default': None, },
    u'seed': {u'type': u'int', u'default': None, },
    u'line-ending': {u'type': u'string', u'default': u'\\n', },
}

# short-form arguments
SHORT_ARGS = {
    u'h': u'help',
    u'v': u'version',
    u't': u'trace',
}


##########################################################################
# logging

class Lumberjack(object):
    """Logging manager."""

    def __init__(self):
        """Set up the global logger temporarily until we know the log stream."""
        # include messages from warnings madule in the logs
        logging.captureWarnings(True)
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.INFO)
        # send to a buffer until we know where to log to
        self._logstream = io.StringIO()
        handler = logging.StreamHandler(self._logstream)
        handler.setFormatter(LOGGING_FORMATTER)
        root_logger.addHandler(handler)

    def reset(self):
        """Reset root logger."""
        root_logger = logging.getLogger()
        # remove all old handlers: temporary ones we set as well as any default ones
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
        return root_logger

    def prepare(self, logfile, debug):
        """Set up the global logger."""
        loglevel = logging.DEBUG if debug else logging.INFO
        root_logger = self.reset()
        root_logger.setLevel(loglevel)
        if logfile:
            logstream = io.open(logfile, 'w', encoding='utf_8', errors='replace')
        else:
            logstream = sys.stderr
        # write out cached logs
        logstream.write(self._logstream.getvalue())
        handler = logging.StreamHandler(logstream)
        handler.setFormatter(LOGGING_FORMATTER)
        root_logger.addHandler(handler)


##############################################################################
# settings container

class Settings(object):
    """Read and retrieve command-line settings and options."""

    def __init__(self, arguments):
        """Initialise settings."""
        if not arguments:
            self._uargv = sys.argv[1:]
        else:
            self._uargv = list(arguments)
        lumberjack = Lumberjack()
        try:
            self._options, self.positional = ArgumentParser().retrieve_options(self._uargv)
        except BaseException:
            # avoid losing exception messages occuring while logging was disabled
            lumberjack.reset()
            raise
        # prepare global logger for use by main program
        lumberjack.prepare(self.get('logfile'), self.get('debug'))

    def get(self, name, get_default=True):
        """Get value of option; choose whether to get default or None (unspecified)."""
        try:
            value = self._options[name]
            if get_default and (value is None or value == u''):
                raise KeyError
        except KeyError:
            if get_default:
                value = ARGUMENTS[name][u'default']
            else:
                value = None
        return value

    @property
    def program(self):
        """Program file name, if exactly one was given."""
        if len(self.positional) == 1:
            return self.positional[0]
        return None

    @property
    def version(self):
        """Version operating mode."""
        return self.get('version')

    @property
    def help(self):
        """Help operating mode."""
        return self.get('help')

    @property
    def lex(self):
        """Token dump operating mode."""
        return self.get('lex')

    @property
    def debug(self):
        """Debugging mode."""
        return self.get('debug')

    @property
    def run_params(self):
        """Return a dictionary of parameters for running a program."""
        line_ending = self.get('line-ending')
        for escape, char in LINE_ENDING_ESCAPES:
            line_ending = line_ending.replace(escape, char)
        return {
            'trace': self.get('trace'),
            'timeout': self.get('timeout'),
            'seed': self.get('seed'),
            'line_ending': line_ending,
        }


##############################################################################
# argument parsing

class ArgumentParser(object):
    """Parse config file and command-line arguments."""

    def retrieve_options(self, uargv):
        """Retrieve command line and option file options; returns options and positionals."""
        # convert command line arguments to string dictionary form
        remaining, positional = self._get_arguments_dict(uargv)
        # config file settings
        args = self._parse_config_arg_and_process_config_file(remaining)
        unrecognised = [(_k, _v) for _k, _v in args.items() if _k not in ARGUMENTS]
        for key, value in unrecognised:
            logging.warning(
                'Ignored unrecognised option `%s=%s` in configuration file', key, value
            )
        args = {_k: _v for _k, _v in args.items() if _k in ARGUMENTS}
        # command-line args override config file settings
        args.update(self._parse_args(remaining))
        self._convert_types(args)
        return args, positional

    def _get_arguments_dict(self, argv):
        """Convert command-line arguments to dictionary and positional list."""
        args = {}
        positional = []
        arg_deque = deque(argv)
        # use -- to end option parsing, everything is a positional argument afterwards
        options_ended = False
        while arg_deque:
            arg = arg_deque.popleft()
            if not arg.startswith(u'-') or options_ended or arg == u'-':
                positional.append(arg)
            elif arg == u'--':
                options_ended = True
            else:
                key, _, value = arg.partition(u'=')
                if key.startswith(u'--'):
                    if key[2:]:
                        args[key[2:]] = value
                else:
                    for short_arg in key[1:]:
                        try:
                            args[SHORT_ARGS[short_arg]] = value
                        except KeyError:
                            logging.warning(u'Ignored unrecognised option `-%s`', short_arg)
        return args, positional

    def _parse_config_arg_and_process_config_file(self, remaining):
        """Find the correct config file and read it."""
        config_file = remaining.pop(u'config', None)
        if not config_file and os.path.exists(CONFIG_NAME):
            config_file = CONFIG_NAME
        if config_file:
            return self._read_config_file(config_file)
        return {}

    def _read_config_file(self, config_file):
        """Read config file; returns the options in our section."""
        try:
            config = configparser.RawConfigParser(allow_no_value=True)
            # use utf_8_sig to ignore a BOM if it's at the start of the file
            with io.open(config_file, 'r', encoding='utf_8_sig', errors='replace') as f:
                config.read_file(WhitespaceStripper(f))
        except (configparser.Error, IOError):
            logging.warning(
                u'Error in configuration file `%s`. Configuration not loaded.', config_file
            )
            return {}
        if not config.has_section(DEFAULT_SECTION):
            return {}
        return {
            _key: (u'' if _value is None else _value)
            for _key, _value in config.items(DEFAULT_SECTION)
        }

    def _parse_args(self, remaining):
        """Process command line options."""
        args = {d: remaining[d] for d in remaining if d in ARGUMENTS}
        for d in remaining:
            if d not in ARGUMENTS:
                logging.warning(u'Ignored unrecognised command-line argument `%s`', d)
        return args

    def _convert_types(self, args):
        """Convert arguments to required type."""
        for name in args:
            args[name] = self._parse_type(name, args[name])

    ##########################################################################
    # type conversions

    def _parse_type(self, d, arg):
        """Convert argument to required type."""
        argtype = ARGUMENTS[d][u'type']
        if argtype == u'int':
            return self._to_int(d, arg)
        elif argtype == u'float':
            return self._to_float(d, arg)
        elif argtype == u'bool':
            return self._to_bool(d, arg)
        return arg

    def _to_bool(self, argname, strval):
        """Convert bool string to bool. Empty string (i.e. specified) means True."""
        if strval == u'':
            return True
        if strval.upper() in TRUES:
            return True
        elif strval.upper() in FALSES:
            return False
        else:
            logging.warning(
                u'Boolean option `%s=%s` interpreted as `%s=True`',
                argname, strval, argname
            )
        return True

    def _to_int(self, argname, strval):
        """Convert int string to int."""
        if strval:
            try:
                return int(strval)
            except ValueError:
                logging.warning(
                    u'Option `%s=%s` ignored: value should be an integer',
                    argname, strval
                )
        return None

    def _to_float(self, argname, strval):
        """Convert number string to float."""
        if strval:
            try:
                return float(strval)
            except ValueError:
                logging.warning(
                    u'Option `%s=%s` ignored: value should be a number',
                    argname, strval
                )
        return None


##############################################################################
# utilities

class WhitespaceStripper(object):
    """File wrapper for ConfigParser that strips leading whitespace."""

    def __init__(self, file):
        """Initialise to file object."""
        self._file = file

    def readline(self):
        """Read a line and strip whitespace (but not EOL)."""
        return self._file.readline().lstrip(u' \t')

    def __next__(self):
        line = self.readline()
        if not line:
            raise StopIteration()
        return line

    def __iter__(self):
        """We are iterable."""
        return self
