"""GSTIN state codes.

The first two digits of a GSTIN are the registering state's code. Each
code maps to the state name and the district used as the default
business location in the sign-up form.
"""

from typing import NamedTuple


class StateInfo(NamedTuple):
    state: str
    district: str


UNKNOWN_STATE = StateInfo(state="", district="")

STATE_CODES: dict[str, StateInfo] = {
    "01": StateInfo("Jammu & Kashmir", "Srinagar"),
    "02": StateInfo("Himachal Pradesh", "Shimla"),
    "03": StateInfo("Punjab", "Chandigarh"),
    "04": StateInfo("Chandigarh", "Chandigarh"),
    "05": StateInfo("Uttarakhand", "Dehradun"),
    "06": StateInfo("Haryana", "Gurugram"),
    "07": StateInfo("Delhi", "New Delhi"),
    "08": StateInfo("Rajasthan", "Jaipur"),
    "09": StateInfo("Uttar Pradesh", "Noida"),
    "10": StateInfo("Bihar", "Patna"),
    "11": StateInfo("Sikkim", "Gangtok"),
    "12": StateInfo("Arunachal Pradesh", "Itanagar"),
    "13": StateInfo("Nagaland", "Kohima"),
    "14": StateInfo("Manipur", "Imphal"),
    "15": StateInfo("Mizoram", "Aizawl"),
    "16": StateInfo("Tripura", "Agartala"),
    "17": StateInfo("Meghalaya", "Shillong"),
    "18": StateInfo("Assam", "Guwahati"),
    "19": StateInfo("West Bengal", "Kolkata"),
    "20": StateInfo("Jharkhand", "Ranchi"),
    "21": StateInfo("Odisha", "Bhubaneswar"),
    "22": StateInfo("Chhattisgarh", "Raipur"),
    "23": StateInfo("Madhya Pradesh", "Indore"),
    "24": StateInfo("Gujarat", "Ahmedabad"),
    "27": StateInfo("Maharashtra", "Mumbai"),
    "29": StateInfo("Karnataka", "Bengaluru Urban"),
    "30": StateInfo("Goa", "Panaji"),
    "32": StateInfo("Kerala", "Thiruvananthapuram"),
    "33": StateInfo("Tamil Nadu", "Chennai"),
    "34": StateInfo("Puducherry", "Puducherry"),
    "35": StateInfo("Andaman and Nicobar Islands", "Port Blair"),
    "36": StateInfo("Telangana", "Hyderabad"),
    "37": StateInfo("Andhra Pradesh", "Visakhapatnam"),
}


def state_info(state_code: str) -> StateInfo:
    """Look up a state code; unmapped codes give empty strings, not an error."""
    return STATE_CODES.get(state_code, UNKNOWN_STATE)
