"""The DXA morning start-up procedure, in order.

Edit INSTRUCTION_SEQUENCE to change what the page walks through.
"""

from startday.state import StepDefinition

INSTRUCTION_SEQUENCE: tuple[StepDefinition, ...] = (
    {"title": "LIGHTS ON", "description": "Switch on all lights."},
    {
        "title": "SYSTEM UP",
        "description": (
            "Switch on the PC. The scanner and printer should start running, if not, "
            "please check if emergency stop button is pressed down or power supply is "
            "switched off. Release the emergency stop button / Switch on the power supply."
        ),
    },
    {"title": "LOGIN QDR", "description": "User: ^_^ Pass: ^_^"},
    {
        "title": "ROOM CHECK",
        "description": (
            "Tidy up the room, move items back to storage if they show up in unusual places."
        ),
    },
    {"title": "CLEANING", "description": "Use Mikrozid wipes to clean the scanner / table pad."},
    {"title": "BACK TO PC", "description": "Confirm system is fully up without any error message."},
    {"title": "DAILY QC", "description": "Select Daily QC."},
    {
        "title": "PLACE PHANTOM",
        "description": (
            "Marking A to the left foot end, align laser cross hair B with the registration mark."
        ),
    },
    {"title": "START QC", "description": "Press continue and let it run."},
    {
        "title": "SYSTEM TEST",
        "description": "If failed, follow instruction on screen to resolve the problem.",
    },
    {
        "title": "AUTO QC",
        "description": (
            "Passed - click OK. Failed - follow instruction on screen to resolve the problem."
        ),
    },
    {
        "title": "AUTO BODY COMPOSITION CALIBRATION",
        "description": "It runs automatically once a week.",
    },
    {"title": "REMOVE QC PHANTOM", "description": "Follow instruction on screen."},
    {"title": "UNIFORMITY TEST", "description": "Click OK to proceed. Done, click OK."},
    {
        "title": "CHECK CONNECTION",
        "description": "Refresh patient list, make sure no connection error message.",
    },
    {
        "title": "DAILY QC CHECK LIST",
        "description": "Complete the checklist, record details of any error message / event.",
    },
    {"title": "TOP UP", "description": "Gowns / tissue / wipes / look around what is missing."},
    {
        "title": "UPDATE",
        "description": (
            "Quick check appointment scheduler, update colleagues if any arrangement required."
        ),
    },
    {
        "title": "READY SET GO",
        "description": (
            "Delivering caring and positive experience is at the heart of healthcare. "
            "Just as important is smooth teamwork. Let's make today a good one \U0001F601"
        ),
    },
)
