# Copyright (c) 2025 Efstratios Goudelis
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.


import logging.config
import logging
import yaml


def get_logger_config(args):
    """
    Read the dictConfig YAML named by ``args.log_config``.

    :raises FileNotFoundError: If the configuration file does not exist.
    :raises yaml.YAMLError: If the file is not valid YAML.
    """

    def yaml_to_dict_config(filepath):
        with open(filepath, "r") as file:
            return yaml.safe_load(file)

    return yaml_to_dict_config(args.log_config)


def get_logger(args):
    """
    Apply the YAML logging config and return the "xdata" logger at ``args.log_level``.

    Decoder modules log under its children (xdata.parser, xdata.parsers.oif411).
    """
    logging_config = get_logger_config(args)

    logging.config.dictConfig(logging_config)

    log = logging.getLogger("xdata")
    log.setLevel(args.log_level)

    return log
