"""Fruit oracles used to mark grid nodes as obstructed."""

from .fruit import FruitField, FruitOracle, FruitPatch, NoFruit, RandomFruit, fruit_field_from_config

__all__ = ['FruitField', 'FruitOracle', 'FruitPatch', 'NoFruit', 'RandomFruit', 'fruit_field_from_config']
