"""
Moteur de statut pilote par les inspections / Inspection-driven status engine.

Chaque nouvelle inspection peut faire avancer la date de derniere inspection
d'un appareil et son statut. La comparaison et l'ecriture sont un seul UPDATE
conditionnel : deux inspections concurrentes ne peuvent pas laisser l'appareil
sur une date plus ancienne que la plus recente, quel que soit le moteur.
"""

import logging

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from edms.models.device import DeviceStatus, EmergencyDevice
from edms.models.inspection import Inspection, InspectionOutcome
from edms.services.device_repository import DeviceNotFoundError

logger = logging.getLogger(__name__)

OUTCOME_TO_STATUS = {
    InspectionOutcome.FAILED.value: DeviceStatus.INSPECTION_FAILED.value,
    InspectionOutcome.PASSED.value: DeviceStatus.ACTIVE.value,
}


async def record_inspection(db: AsyncSession, inspection: Inspection) -> bool:
    """Inserer une inspection et mettre a jour l'appareil / Insert inspection and update device.

    L'appareil n'avance que si la date d'inspection est strictement plus
    recente que sa derniere inspection (ou s'il n'en a aucune). Un resultat
    inconnu avance la date mais conserve le statut. Retourne True si
    l'appareil a ete mis a jour.
    """
    exists = await db.scalar(select(EmergencyDevice.id).where(EmergencyDevice.id == inspection.device_id))
    if exists is None:
        raise DeviceNotFoundError(inspection.device_id)

    db.add(inspection)
    await db.flush()

    values = {"last_inspection_date": inspection.inspection_date}
    status = OUTCOME_TO_STATUS.get(inspection.inspection_status)
    if status is not None:
        values["status"] = status

    result = await db.execute(
        update(EmergencyDevice)
        .where(
            EmergencyDevice.id == inspection.device_id,
            or_(
                EmergencyDevice.last_inspection_date.is_(None),
                EmergencyDevice.last_inspection_date < inspection.inspection_date,
            ),
        )
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    updated = result.rowcount == 1

    # Recharger l'etat reel / Reload the stored state into the identity map
    device = await db.get(EmergencyDevice, inspection.device_id, populate_existing=True)
    if not updated:
        logger.info(
            "Inspection date %s is not more recent than %s for device %s, no update performed",
            inspection.inspection_date, device.last_inspection_date, device.id,
        )
        return False

    logger.info(
        "Device %s status set to %r, last inspection date %s",
        device.id, device.status, device.last_inspection_date,
    )
    return True
