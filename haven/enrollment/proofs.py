"""Local-disk storage for payment proof uploads."""
import logging
import mimetypes
import os

from flask import current_app
from werkzeug.utils import secure_filename

from ..errors import StorageError
from ..store import now_ms

logger = logging.getLogger(__name__)


class ProofStorage:
    def __init__(self, folder=None):
        self._folder = folder

    @property
    def folder(self):
        return self._folder or current_app.config['UPLOAD_FOLDER']

    def save(self, file):
        """Write an uploaded ``FileStorage`` and return its path, or None when empty."""
        if file is None or not file.filename:
            return None
        filename = secure_filename(file.filename) or 'proof'
        path = os.path.join(self.folder, f'{now_ms()}-{filename}')
        try:
            os.makedirs(self.folder, exist_ok=True)
            file.save(path)
        except OSError as e:
            logger.error(f"Could not store proof {filename}: {e}")
            raise StorageError('Proof could not be stored') from e
        return path

    def load(self, path):
        try:
            with open(path, 'rb') as f:
                data = f.read()
        except OSError as e:
            logger.warning(f"Proof {path} unreadable: {e}")
            raise StorageError(
                'Proof not available on this platform. Configure durable uploads to keep proofs.'
            ) from e
        mimetype = mimetypes.guess_type(path)[0] or 'image/jpeg'
        return data, mimetype


proofs = ProofStorage()
