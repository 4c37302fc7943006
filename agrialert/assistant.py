"""
Scripted assistant
==================

The chat assistant has no model behind it: each message is lower-cased and
checked against keyword groups in a fixed order, and the first group that
matches picks the answer.
"""

from __future__ import annotations
from typing import Optional, Sequence, Tuple

from .models import Province

GREETING = (
    "Hello! I'm your AgriAlert SA assistant. How can I help you with weather alerts "
    "and agricultural safety today?"
)

PROVINCE_LIST = (
    "Western Cape, Eastern Cape, Northern Cape, Free State, KwaZulu-Natal, "
    "North West, Gauteng, Mpumalanga, and Limpopo"
)

# (keywords, answer); "{temps}" is filled with the provinces' current temperatures
RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("weather", "alert", "warning"),
     "I can help you with live weather alerts! Currently, we have active warnings for frost in "
     "Western Cape, rainfall in KwaZulu-Natal, and wind in Free State. The weather data is updated "
     "every 30 minutes. Would you like specific details about any province?"),
    (("temperature", "hot", "sunny"),
     "Current live temperatures: {temps}. Data refreshed every 30 minutes."),
    (("province", "location"),
     "I can provide live weather information for all 9 South African provinces: "
     + PROVINCE_LIST + ". Which province would you like current conditions for?"),
    (("frost", "cold"),
     "Frost Warning: Temperatures are expected to drop below -2°C tonight in Western Cape. Please "
     "protect sensitive crops by covering them and ensure livestock have adequate shelter. Move "
     "potted plants indoors if possible."),
    (("rain", "flood"),
     "Heavy Rainfall Alert: KwaZulu-Natal is expecting intense rainfall for the next 48 hours with "
     "flooding risk in low-lying areas. Clear drainage channels and move equipment to higher ground."),
    (("wind", "storm"),
     "Wind Advisory: Free State is experiencing wind speeds up to 60 km/h. Secure greenhouse panels, "
     "tie down equipment, and check structural integrity of buildings."),
    (("emergency", "help", "sos"),
     "For immediate emergencies, call 10111. You can also use the emergency reporting feature to "
     "notify local authorities. Would you like me to guide you through the emergency report process?"),
    (("crop", "farm", "agriculture"),
     "Agricultural Safety Tips:\n"
     "- Frost: Cover sensitive plants and ensure livestock shelter\n"
     "- Flooding: Clear drainage and move equipment to higher ground\n"
     "- Wind: Secure greenhouse structures and equipment\n"
     "- Always keep emergency contacts handy: 10177 (Police), 10111 (Emergency)"),
    (("thank",),
     "You're welcome! I'm here 24/7 to help with live weather alerts and agricultural safety. "
     "Stay safe and don't hesitate to reach out if you need assistance!"),
)

DEFAULT_ANSWER = (
    "I'm here to help with live weather alerts and agricultural safety! You can ask me about:\n"
    "- Current weather warnings (updated every 30 minutes)\n"
    "- Province-specific live conditions\n"
    "- Emergency procedures\n"
    "- Agricultural safety tips\n"
    "- How to report emergencies\n\n"
    "What would you like to know?"
)


def respond(message: str, provinces: Sequence[Province]) -> Optional[str]:
    """Answer one chat message; None for a blank message."""
    text = message.strip().lower()
    if not text:
        return None
    for keywords, answer in RULES:
        if any(k in text for k in keywords):
            if "{temps}" in answer:
                temps = ", ".join(f"{p.name}: {p.weather.temperature}°C" for p in provinces)
                return answer.format(temps=temps)
            return answer
    return DEFAULT_ANSWER
