from enum import Enum


class ActivityType(str, Enum):
    commute = "commute"
    food = "food"
    electricity = "electricity"


class TransportMode(str, Enum):
    car = "car"
    bus = "bus"
    train = "train"
    plane = "plane"
    motorcycle = "motorcycle"
    bicycle = "bicycle"
    walking = "walking"


class FoodType(str, Enum):
    beef = "beef"
    pork = "pork"
    chicken = "chicken"
    fish = "fish"
    dairy = "dairy"
    vegetables = "vegetables"
    fruits = "fruits"
    grains = "grains"


class MassUnit(str, Enum):
    kg = "kg"
    g = "g"
    lb = "lb"


class EnergyUnit(str, Enum):
    kwh = "kwh"
    mwh = "mwh"


class Period(str, Enum):
    day = "day"
    week = "week"
