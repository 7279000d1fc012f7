"""
Routes Sites / Site API routes.

Creation et modification passent par le formulaire d'administration
(multipart, plan du site optionnel) et repondent par une redirection vers
/admin. Chaque ecriture disque est compensee si la base refuse la
modification ; l'ancien fichier n'est supprime qu'apres validation en base.
"""

import logging
import re

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import RedirectResponse
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from edms.database import get_db
from edms.models.building import Building
from edms.models.device import EmergencyDevice
from edms.models.room import Room
from edms.models.site import Site
from edms.models.user import User
from edms.schemas.site import SiteRead
from edms.services.site_map_storage import InvalidSiteMapError, SiteMapStorage
from edms.api.deps import get_current_user, require_admin
from edms.api.responses import failure, redirect_error, redirect_message, success

logger = logging.getLogger(__name__)

router = APIRouter()

ADMIN_PAGE = "/admin"
SITE_NAME_MAX_LENGTH = 100
SITE_ADDRESS_MAX_LENGTH = 255
_SITE_NAME_PATTERN = re.compile(r"[a-zA-Z0-9\s_-]+")


def get_site_map_storage() -> SiteMapStorage:
    return SiteMapStorage()


def _site_form_error(name: str, address: str) -> str | None:
    """Premier motif de rejet du formulaire / First form rejection reason."""
    if not name or not address:
        return "All fields are required"
    if len(name) > SITE_NAME_MAX_LENGTH or len(address) > SITE_ADDRESS_MAX_LENGTH:
        return "Site name should be less than 100 characters and address should be less than 255 characters"
    if not _SITE_NAME_PATTERN.fullmatch(name):
        return "Site name can only contain letters, numbers, spaces, hyphens, and underscores"
    return None


async def _name_taken(db: AsyncSession, name: str, exclude_id: int | None = None) -> bool:
    query = select(Site.id).where(Site.name == name)
    if exclude_id is not None:
        query = query.where(Site.id != exclude_id)
    return await db.scalar(query) is not None


def _has_upload(map_image: UploadFile | None) -> bool:
    # Un champ fichier vide arrive sans nom / An empty file input arrives without a filename
    return map_image is not None and bool(map_image.filename)


@router.get("/", response_model=list[SiteRead])
async def list_sites(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Lister les sites / List sites."""
    result = await db.execute(select(Site).order_by(Site.name))
    return result.scalars().all()


@router.get("/{site_id}", response_model=SiteRead)
async def get_site(
    site_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    site = await db.get(Site, site_id)
    if not site:
        raise HTTPException(status_code=404, detail="Site not found")
    return site


@router.post("/")
async def create_site(
    name: str = Form(""),
    address: str = Form(""),
    map_image: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    storage: SiteMapStorage = Depends(get_site_map_storage),
    user: User = Depends(require_admin),
) -> RedirectResponse:
    """Creer un site, plan optionnel / Create a site with an optional map image."""
    name, address = name.strip(), address.strip()
    error = _site_form_error(name, address)
    if error is None and await _name_taken(db, name):
        error = "Site name already exists"
    if error is not None:
        return redirect_error(ADMIN_PAGE, error)

    map_url = None
    if _has_upload(map_image):
        try:
            map_url = storage.save(name, map_image.filename, await map_image.read())
        except InvalidSiteMapError as exc:
            return redirect_error(ADMIN_PAGE, str(exc))
        except OSError:
            logger.exception("Error writing site map for %r", name)
            raise failure(500, "Error creating file", page=ADMIN_PAGE) from None

    site = Site(name=name, address=address, map_image_path=map_url)
    db.add(site)
    try:
        await db.commit()
    except SQLAlchemyError:
        if map_url:
            storage.delete(map_url)
        raise

    logger.info("Site %r created by %s", name, user.username)
    return redirect_message(ADMIN_PAGE, "Site added successfully")


@router.put("/{site_id}")
async def update_site(
    site_id: int,
    name: str = Form(""),
    address: str = Form(""),
    map_image: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    storage: SiteMapStorage = Depends(get_site_map_storage),
    user: User = Depends(require_admin),
) -> RedirectResponse:
    """Modifier un site / Update a site.

    Nouveau plan : ecrit sous le nouveau nom, l'ancien fichier est supprime
    apres le commit. Renommage sans plan : le fichier existant suit le nom.
    """
    name, address = name.strip(), address.strip()
    error = _site_form_error(name, address)
    if error is not None:
        return redirect_error(ADMIN_PAGE, error)

    site = await db.get(Site, site_id)
    if not site:
        return redirect_error(ADMIN_PAGE, "Site not found")
    if await _name_taken(db, name, exclude_id=site.id):
        return redirect_error(ADMIN_PAGE, "Site name already exists")

    old_name, old_url = site.name, site.map_image_path
    new_url = old_url
    uploaded = _has_upload(map_image)
    try:
        if uploaded:
            new_url = storage.save(name, map_image.filename, await map_image.read())
        elif old_url and name != old_name:
            new_url = storage.rename(old_url, name)
    except InvalidSiteMapError as exc:
        return redirect_error(ADMIN_PAGE, str(exc))
    except OSError:
        logger.exception("Error writing site map for site %s", site.id)
        raise failure(500, "Error saving site map", page=ADMIN_PAGE) from None

    site.name = name
    site.address = address
    site.map_image_path = new_url
    try:
        await db.commit()
    except SQLAlchemyError:
        # Annuler le changement disque / Undo the disk change
        if uploaded and new_url != old_url:
            storage.delete(new_url)
        elif not uploaded and new_url != old_url:
            storage.rename(new_url, old_name)
        raise

    if uploaded and old_url and old_url != new_url:
        try:
            storage.delete(old_url)
        except OSError:
            logger.exception("Old site map %s could not be removed", old_url)

    logger.info("Site %s updated by %s", site.id, user.username)
    return redirect_message(ADMIN_PAGE, "Site updated successfully")


@router.delete("/{site_id}")
async def delete_site(
    site_id: int,
    db: AsyncSession = Depends(get_db),
    storage: SiteMapStorage = Depends(get_site_map_storage),
    user: User = Depends(require_admin),
):
    """Supprimer un site sans dependances / Delete a site with no dependents.

    Refuse tant qu'un appareil, une salle ou un batiment y est rattache.
    """
    site = await db.get(Site, site_id)
    if not site:
        raise failure(404, "Error fetching site", page=ADMIN_PAGE)

    devices = await db.scalar(
        select(func.count(EmergencyDevice.id))
        .join(Room, EmergencyDevice.room_id == Room.id)
        .join(Building, Room.building_id == Building.id)
        .where(Building.site_id == site_id)
    )
    if devices:
        raise failure(400, "Cannot delete site with associated emergency devices", page=ADMIN_PAGE)

    rooms = await db.scalar(
        select(func.count(Room.id))
        .join(Building, Room.building_id == Building.id)
        .where(Building.site_id == site_id)
    )
    if rooms:
        raise failure(400, "Cannot delete site with associated rooms", page=ADMIN_PAGE)

    buildings = await db.scalar(select(func.count(Building.id)).where(Building.site_id == site_id))
    if buildings:
        raise failure(400, "Cannot delete site with associated buildings", page=ADMIN_PAGE)

    map_url = site.map_image_path
    await db.delete(site)
    await db.flush()

    if map_url:
        try:
            storage.delete(map_url)
        except OSError:
            logger.exception("Error deleting site map %s", map_url)
            # ActionFailed fait annuler la suppression par get_db / get_db rolls the delete back
            raise failure(500, "Error deleting site map image", page=ADMIN_PAGE) from None

    logger.info("Site %s deleted by %s", site_id, user.username)
    return success("Site deleted successfully", page=ADMIN_PAGE)
