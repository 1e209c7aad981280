"""
Service de conversion d'unites / Unit conversion service.
Fonctions pures : distance, volume et consommation (L/100km, MPG US).
"""

from fuellog.models.user import DistanceUnit, VolumeUnit

KM_PER_MILE = 1.609344
LITERS_PER_GALLON = 3.785411784  # gallon US

# mpg = L_PER_100KM_MPG_FACTOR / (L/100km)
L_PER_100KM_MPG_FACTOR = 100 * LITERS_PER_GALLON / KM_PER_MILE


class UnitConversionService:
    """Conversions metrique / imperial / Metric and imperial conversions."""

    @staticmethod
    def to_km(value: float, unit: DistanceUnit | str) -> float:
        """Distance en km / Distance in km."""
        if DistanceUnit(unit) is DistanceUnit.MILE:
            return value * KM_PER_MILE
        return value

    @staticmethod
    def to_liters(value: float, unit: VolumeUnit | str) -> float:
        """Volume en litres / Volume in liters."""
        if VolumeUnit(unit) is VolumeUnit.GALLON:
            return value * LITERS_PER_GALLON
        return value

    @staticmethod
    def km_to_miles(distance_km: float) -> float:
        return distance_km / KM_PER_MILE

    @staticmethod
    def liters_to_gallons(volume_l: float) -> float:
        return volume_l / LITERS_PER_GALLON

    @staticmethod
    def calculate_l_per_100km(distance_km: float, volume_l: float) -> float:
        """
        Consommation en L/100km / Economy in L/100km.
        L'appelant garantit distance_km > 0 / Caller guarantees distance_km > 0.
        """
        return (volume_l / distance_km) * 100

    @staticmethod
    def mpg_from_metric(distance_km: float, volume_l: float) -> float:
        """
        Consommation en miles par gallon US / Economy in miles per US gallon.
        L'appelant garantit volume_l > 0 / Caller guarantees volume_l > 0.
        """
        return (distance_km / KM_PER_MILE) / (volume_l / LITERS_PER_GALLON)
