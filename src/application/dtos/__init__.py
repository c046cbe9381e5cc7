"""Application DTOs: validated command inputs."""

from src.application.dtos.attestation import SubmitAttestationInput
from src.application.dtos.citizen_pool import EnrollCitizenInput
from src.application.dtos.dispute import FileDisputeInput, ResolveDisputeInput
from src.application.dtos.milestone import CreateMilestoneInput
from src.application.dtos.validation import parse_input
from src.application.dtos.webhook import (
    CreateWebhookSubscriptionInput,
    UpdateWebhookSubscriptionInput,
)

__all__: list[str] = [
    "CreateMilestoneInput",
    "CreateWebhookSubscriptionInput",
    "EnrollCitizenInput",
    "FileDisputeInput",
    "ResolveDisputeInput",
    "SubmitAttestationInput",
    "UpdateWebhookSubscriptionInput",
    "parse_input",
]
