"""Canonical encoding of the policy option bag"""

import json

from logger import get_logger
from models.policy import PolicyOption, StoragePolicy

logger = get_logger(__name__)


def encode_options(options: PolicyOption) -> str:
    """
    Encode option bag into its persisted string form.

    Keys are sorted and separators compact, so the same bag always
    produces byte-identical output.

    Args:
        options: Structured option bag

    Returns:
        Canonical JSON string
    """
    return json.dumps(
        options.model_dump(by_alias=True),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def decode_options(raw: str | None) -> PolicyOption:
    """
    Decode persisted option string back into the structured bag.

    Empty or missing strings give the default bag.

    Raises:
        pydantic.ValidationError: If stored data is malformed
    """
    if not raw:
        return PolicyOption()
    return PolicyOption.model_validate_json(raw)


def prepare_for_save(policy: StoragePolicy) -> StoragePolicy:
    """
    Pre-persistence step: sync the encoded option string with the option bag.

    Must run right before the policy is handed to storage.

    Returns:
        Copy of the policy with `options` set to the canonical encoding
    """
    encoded = encode_options(policy.options_serialized)
    if encoded != policy.options:
        logger.debug(f"Options re-encoded: policy={policy.id}", policy_id=policy.id)
    return policy.model_copy(update={"options": encoded})
