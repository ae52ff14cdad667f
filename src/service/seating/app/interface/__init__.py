"""Application layer interfaces (Ports)"""

from src.service.seating.app.interface.i_bus_configuration_repo import IBusConfigurationRepo
from src.service.seating.app.interface.i_layout_template_repo import ILayoutTemplateRepo
from src.service.seating.app.interface.i_participant_directory import IParticipantDirectory
from src.service.seating.app.interface.i_seat_assignment_repo import ISeatAssignmentRepo
from src.service.seating.app.interface.i_seat_claim_token_repo import ISeatClaimTokenRepo

__all__ = [
    'IBusConfigurationRepo',
    'ILayoutTemplateRepo',
    'IParticipantDirectory',
    'ISeatAssignmentRepo',
    'ISeatClaimTokenRepo',
]
