"""
XML nach JSON, gesteuert durch eine deklarative Mapping-Datei.
Einstieg für die Kommandozeile: conversion/xml_to_json.py
"""
