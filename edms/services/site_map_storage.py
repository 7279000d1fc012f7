"""
Stockage des plans de site / Site map image storage.

Les fichiers sont nommes d'apres le site (espaces -> `_`, caracteres hors
[A-Za-z0-9_-] supprimes) et servis sous SITE_MAP_URL_PREFIX. Les appels sont
synchrones ; l'appelant combine chaque ecriture disque avec une action
compensatoire si l'ecriture en base echoue.
"""

import logging
import re
from pathlib import Path, PurePosixPath

from edms.config import settings

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".svg"}

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


class InvalidSiteMapError(ValueError):
    """Fichier de plan refuse / Rejected site map file."""


def sanitize_site_name(site_name: str) -> str:
    return _UNSAFE_CHARS.sub("", site_name.replace(" ", "_"))


def map_extension(filename: str) -> str:
    """Extension du fichier envoye, validee / Validated extension of the upload."""
    ext = PurePosixPath(filename or "").suffix
    if ext not in ALLOWED_EXTENSIONS:
        raise InvalidSiteMapError("Invalid file type. Allowed types: jpg, jpeg, png, gif, svg")
    return ext


class SiteMapStorage:
    """Fichiers de plans sur disque / Site map files on disk."""

    def __init__(self, base_dir: str | Path | None = None, url_prefix: str | None = None) -> None:
        self.base_dir = Path(base_dir or settings.SITE_MAPS_DIR)
        self.url_prefix = url_prefix or settings.SITE_MAP_URL_PREFIX

    def url_for(self, site_name: str, ext: str) -> str:
        return f"{self.url_prefix}{sanitize_site_name(site_name)}{ext}"

    def path_for_url(self, url: str) -> Path:
        """Chemin disque d'une URL de plan / Disk path of a map URL."""
        return self.base_dir / PurePosixPath(url).name

    def save(self, site_name: str, filename: str, content: bytes) -> str:
        """Ecrire le plan d'un site et retourner son URL / Write a site map, return its URL."""
        ext = map_extension(filename)
        if len(content) > settings.MAX_SITE_MAP_SIZE:
            raise InvalidSiteMapError("Site map image is too large")
        url = self.url_for(site_name, ext)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.path_for_url(url).write_bytes(content)
        logger.info("Site map written: %s", url)
        return url

    def rename(self, old_url: str, new_site_name: str) -> str:
        """Renommer le plan apres changement de nom du site / Rename after a site rename."""
        new_url = self.url_for(new_site_name, PurePosixPath(old_url).suffix)
        if new_url == old_url:
            return old_url
        try:
            self.path_for_url(old_url).rename(self.path_for_url(new_url))
        except FileNotFoundError:
            logger.warning("Site map file missing, keeping path: %s", old_url)
            return old_url
        logger.info("Site map renamed: %s -> %s", old_url, new_url)
        return new_url

    def delete(self, url: str) -> bool:
        """Supprimer un plan ; False si deja absent / Delete a map; False if already gone."""
        try:
            self.path_for_url(url).unlink()
        except FileNotFoundError:
            logger.warning("Site map file missing, nothing to delete: %s", url)
            return False
        logger.info("Site map deleted: %s", url)
        return True
