#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import argparse
import asyncio
import json
import logging
import sys
from enum import IntEnum

from fibaro.homekit_bridge.bridge.characteristics import (
    Characteristic,
    CharacteristicKind,
    CharacteristicProps,
    identity_for,
)
from fibaro.homekit_bridge.bridge.converter_registry import ConverterRegistry
from fibaro.homekit_bridge.bridge.models import ServiceDescriptor
from fibaro.homekit_bridge.downstream.fibaro_http.client import FibaroHttpClient
from fibaro.homekit_bridge.lib.config_loader import BridgeConfig, ConfigError, load_config
from fibaro.homekit_bridge.lib.constants import (
    FIBARO_HOMEKIT_CLI_LOGGER_NAME,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
)

# Exit codes for CLI
class ExitCode(IntEnum):
    # Common linux codes (0-9)
    GEN_SUCCESS = 0 # Generic success for any command
    GEN_ERROR = 1  # Unexpected errors
    INIT_ERROR = 2  # Initialization errors (bad argument, bad config, etc)

    # Convert command (10-19)
    CONVERT_WRITTEN = 10
    CONVERT_SKIPPED = 11

CONVERT_RESULT_PREF = "Convert result:"

logger = logging.getLogger(FIBARO_HOMEKIT_CLI_LOGGER_NAME)


def list_characteristics():
    """Print every characteristic with a getter and its HomeKit identity."""
    registry = ConverterRegistry.from_identities()
    for kind in registry.kinds():
        print("%-28s %s" % (kind.value, identity_for(kind)))
    return ExitCode.GEN_SUCCESS


async def _convert(args, cfg: BridgeConfig):
    zones = None
    if cfg.hub is not None:
        zones = FibaroHttpClient(cfg=cfg.hub)
    registry = ConverterRegistry.from_identities(settings=cfg.converters, zones=zones)

    kind = CharacteristicKind(args.characteristic)
    characteristic = Characteristic(identity_for(kind), CharacteristicProps(args.min, args.max))
    service = ServiceDescriptor(
        device_ids=list(args.device_id),
        is_climate_zone=args.climate_zone,
        is_heating_zone=args.heating_zone,
        is_global_variable_dimmer=args.global_variable_dimmer,
        is_lock_switch=args.lock_switch,
    )
    try:
        return await registry.refresh(characteristic, service, service.device_ids, args.properties)
    finally:
        if zones is not None:
            await zones.close()


def convert(args):
    """
    Run one getter against a properties JSON object and print the outcome.

    Returns:
        ExitCode
    """
    cfg = BridgeConfig()
    if args.config:
        try:
            cfg = load_config(args.config)
        except ConfigError as e:
            logger.error("%s failed %s", CONVERT_RESULT_PREF, e)
            print("%s failed (bad config)" % CONVERT_RESULT_PREF)
            return ExitCode.INIT_ERROR
        logging.getLogger().setLevel(cfg.log_level.upper())

    try:
        CharacteristicKind(args.characteristic)
    except ValueError:
        print("%s failed (unknown characteristic %r)" % (CONVERT_RESULT_PREF, args.characteristic))
        return ExitCode.INIT_ERROR

    try:
        args.properties = json.loads(args.properties)
    except json.JSONDecodeError as e:
        print("%s failed (properties are not JSON: %s)" % (CONVERT_RESULT_PREF, e))
        return ExitCode.INIT_ERROR
    if not isinstance(args.properties, dict):
        print("%s failed (properties must be a JSON object)" % CONVERT_RESULT_PREF)
        return ExitCode.INIT_ERROR

    try:
        outcome = asyncio.run(_convert(args, cfg))
    except Exception as e:
        logger.error("%s Failed %r", CONVERT_RESULT_PREF, e)
        print("%s Failed with unknown error" % CONVERT_RESULT_PREF)
        return ExitCode.GEN_ERROR

    if outcome.updated:
        value = outcome.value
        if isinstance(value, IntEnum):
            value = "%s (%s)" % (int(value), value.name)
        print("%s %s" % (CONVERT_RESULT_PREF, value))
        return ExitCode.CONVERT_WRITTEN
    print("%s skipped (%s)" % (CONVERT_RESULT_PREF, outcome.reason))
    return ExitCode.CONVERT_SKIPPED


def main(argv=None):
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    parser = argparse.ArgumentParser(
        prog='fibaro-homekit-values',
        description='Inspect hub -> HomeKit value conversions',
        usage='fibaro-homekit-values [-h] <command>',
        add_help=False,
        epilog="""
Example:
  fibaro-homekit-values convert Brightness '{"value": "99"}'
"""
    )

    parser.add_argument(
        '-h', '--help',
        action='help',
        help='Show this help message and exit'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        title='Available commands',
        metavar='<command>          '
    )

    subparsers.add_parser(
        'list',
        help='List characteristics with a getter'
    )
    convert_parser = subparsers.add_parser(
        'convert',
        help='Convert device properties into a characteristic value'
    )
    convert_parser.add_argument('characteristic', help='Characteristic name, e.g. Brightness')
    convert_parser.add_argument('properties', help='Device properties as JSON object')
    convert_parser.add_argument('--device-id', action='append', default=[], help='Hub device or zone id')
    convert_parser.add_argument('--climate-zone', action='store_true')
    convert_parser.add_argument('--heating-zone', action='store_true')
    convert_parser.add_argument('--global-variable-dimmer', action='store_true')
    convert_parser.add_argument('--lock-switch', action='store_true')
    convert_parser.add_argument('--min', type=float, default=None, help='Characteristic minValue')
    convert_parser.add_argument('--max', type=float, default=None, help='Characteristic maxValue')
    convert_parser.add_argument('--config', default=None, help='Bridge config with hub access')

    args = parser.parse_args(argv)
    if args.command == "list":
        return int(list_characteristics())
    if args.command == "convert":
        return int(convert(args))
    parser.print_help()
    return int(ExitCode.INIT_ERROR)


if __name__ == "__main__":
    sys.exit(main())
