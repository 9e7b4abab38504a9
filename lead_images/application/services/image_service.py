import contextlib
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from ...exceptions import CapacityExhaustedError, NotFoundError
from ..ports.image_repo import ImageRepository, ProfileImageDto
from ..ports.profile_locks import ProfileLocks
from ..ports.profile_repo import ProfileRepository
from .image_validation import ImageValidator, decode_payload

logger = logging.getLogger(__name__)

MAX_IMAGES_PER_PROFILE = 10


@dataclass
class UploadResult:
    success: bool
    message: str
    images: List[ProfileImageDto]
    remaining_slots: int
    evicted: List[ProfileImageDto] = field(default_factory=list)
    rejected_file_names: List[str] = field(default_factory=list)

    @property
    def images_uploaded(self) -> int:
        return len(self.images)


@dataclass
class ImageCapacity:
    count: int
    max_allowed: int

    @property
    def remaining_slots(self) -> int:
        return self.max_allowed - self.count


@dataclass
class ProfileImageService:
    """Upload, eviction and ordering policy for profile images.

    A profile holds at most ``max_images`` images. When it is full, an upload
    first evicts the oldest non-priority images (one per incoming item) and
    then fills the freed slots. Items that fail payload validation are skipped
    and reported by file name; items beyond the available slots are dropped
    and reported as a count.

    Without ``locks`` two concurrent uploads to a nearly full profile can both
    pass the capacity check and push it over the limit.
    """

    image_repo: ImageRepository
    profile_repo: ProfileRepository
    validator: ImageValidator = field(default_factory=ImageValidator)
    max_images: int = MAX_IMAGES_PER_PROFILE
    locks: Optional[ProfileLocks] = None

    def list_for_profile(self, profile_id: int) -> List[ProfileImageDto]:
        return self.image_repo.list_for_profile(profile_id)

    def get_image(self, image_id: int) -> Optional[ProfileImageDto]:
        return self.image_repo.get_by_id(image_id)

    def count_for_profile(self, profile_id: int) -> int:
        return self.image_repo.count_for_profile(profile_id)

    def capacity(self, profile_id: int) -> ImageCapacity:
        return ImageCapacity(count=self.count_for_profile(profile_id), max_allowed=self.max_images)

    def upload(self, profile_id: int, encoded_images: Sequence[str], file_names: Sequence[str]) -> UploadResult:
        if not self.profile_repo.exists(profile_id):
            raise NotFoundError("Profile not found")

        lock = self.locks.hold(profile_id) if self.locks is not None else contextlib.nullcontext()
        with lock:
            return self._upload(profile_id, list(zip(encoded_images, file_names)))

    def _upload(self, profile_id: int, batch: List[tuple]) -> UploadResult:
        current_count = self.image_repo.count_for_profile(profile_id)
        available_slots = self.max_images - current_count
        requested_count = len(batch)
        evicted: List[ProfileImageDto] = []

        if available_slots <= 0:
            evicted = self._evict_oldest(profile_id, requested_count)
            available_slots = len(evicted)
            current_count = self.max_images - len(evicted)

        to_upload = batch[:available_slots]
        limit_rejected = requested_count - len(to_upload)

        uploaded: List[ProfileImageDto] = []
        invalid_names: List[str] = []
        for payload, file_name in to_upload:
            if not self.validator.is_admissible_image(payload):
                invalid_names.append(file_name)
                continue

            image = ProfileImageDto(
                id=None,
                profile_id=profile_id,
                image_data=decode_payload(payload),
                file_name=file_name,
                content_type=self.validator.detect_content_type(payload),
                uploaded_at=datetime.now(timezone.utc),
                display_order=current_count + len(uploaded) + 1,
                # TODO: decide whether new uploads should default to non-priority;
                # as is, every image is protected from eviction until demoted
                is_priority=True,
            )
            uploaded.append(self.image_repo.add(image))

        if invalid_names:
            logger.info(f"Profile {profile_id}: skipped invalid images {invalid_names}")
        if limit_rejected > 0:
            logger.info(f"Profile {profile_id}: {limit_rejected} image(s) dropped over the limit")

        message = (
            f"Successfully uploaded {len(uploaded)} image(s)"
            if uploaded
            else "No valid images were uploaded"
        )
        if invalid_names:
            message += f". Invalid images: {', '.join(invalid_names)}"
        if limit_rejected > 0:
            message += f". {limit_rejected} image(s) were rejected due to limit"

        return UploadResult(
            success=len(uploaded) > 0,
            message=message,
            images=uploaded,
            remaining_slots=self.max_images - (current_count + len(uploaded)),
            evicted=evicted,
            rejected_file_names=invalid_names,
        )

    def _evict_oldest(self, profile_id: int, requested_count: int) -> List[ProfileImageDto]:
        images = self.image_repo.list_for_profile(profile_id)
        # sorted() is stable, so equal timestamps keep display order
        candidates = sorted((i for i in images if not i.is_priority), key=lambda i: i.uploaded_at)
        if not candidates:
            logger.warning(f"Profile {profile_id} is full and all images are priority")
            raise CapacityExhaustedError(
                f"Maximum number of images ({self.max_images}) already reached for this profile "
                "and no non-priority images to replace. Please delete some images first."
            )

        evicted = candidates[:requested_count]
        for image in evicted:
            self.image_repo.delete(image.id)
        logger.info(f"Profile {profile_id}: evicted {len(evicted)} non-priority image(s)")
        return evicted

    def delete_image(self, image_id: int) -> bool:
        if not self.image_repo.exists(image_id):
            return False
        self.image_repo.delete(image_id)
        return True

    def set_priority(self, image_id: int, is_priority: bool) -> ProfileImageDto:
        image = self.image_repo.get_by_id(image_id)
        if not image:
            raise NotFoundError("Image not found")
        image.is_priority = is_priority
        self.image_repo.update(image)
        return image
