#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Downstream hub clients

Downstream = "southbound" side of the bridge (the home automation hub)

Converters receive already fetched device properties; climate and heating
zones keep their state apart from devices and are fetched through a
ZoneClient on demand.

Each hub transport is placed into its own package under:

  fibaro.homekit_bridge.downstream.<name>/

Example:
  - fibaro_http  (REST API of the hub, JSON over HTTP)
"""
