"""
Service de calcul des dates derivees / Derived date computation service.
Dates d'affichage uniquement, jamais persistees.
"""

from datetime import date

from dateutil.relativedelta import relativedelta

# Duree de vie d'un appareil / Device service life
EXPIRY_PERIOD = relativedelta(years=5)
# Periodicite des inspections / Inspection interval
INSPECTION_INTERVAL = relativedelta(months=3)


class DeviceDatesService:
    """Calcul des echeances d'un appareil / Device due-date computation."""

    @staticmethod
    def expiry_date(manufacture_date: date | None) -> date | None:
        """Date d'expiration = fabrication + 5 ans / Expiry = manufacture + 5 years."""
        if manufacture_date is None:
            return None
        return manufacture_date + EXPIRY_PERIOD

    @staticmethod
    def next_inspection_date(last_inspection_date: date | None) -> date | None:
        """Prochaine inspection = derniere + 3 mois / Next inspection = last + 3 months."""
        if last_inspection_date is None:
            return None
        return last_inspection_date + INSPECTION_INTERVAL
