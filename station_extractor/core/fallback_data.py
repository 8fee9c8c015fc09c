"""Synthetic fallback dataset.

A fixed list of well-known schools, churches and community centres per
parish. It is used when the real sources under-deliver, so the pipeline
always produces a parish-complete result, even with no network and no model
access. Pure data: no I/O, same output every call.
"""

from station_extractor.core.config import OutputConfig
from station_extractor.core.parishes import PARISHES, Parish
from station_extractor.pydantic_models.stations import PollingStationRecord

FALLBACK_STATION_NAMES: dict[str, tuple[str, ...]] = {
    "Kingston": (
        "Alpha Primary School", "Kingston College", "Holy Trinity Cathedral", "St. George's College",
        "Wolmer's Boys School", "Camperdown High School", "Excelsior High School", "Charlie Smith High School",
        "Norman Manley High School", "Denham Town Primary School", "St. Michael's Primary School",
        "Central Branch Library", "Kingston Parish Church Hall", "YMCA Kingston", "Tivoli Gardens Community Centre",
        "Fletcher's Land Community Centre", "Jones Town Primary School", "St. Aloysius Primary School",
        "Allman Town Primary School", "Rae Town Primary School",
    ),
    "St. Andrew": (
        "University of the West Indies", "Meadowbrook High School", "Calabar High School", "Jamaica College",
        "Immaculate Conception High School", "Ardenne High School", "Papine High School", "Kingsway High School",
        "Mona Primary School", "Barbican Primary School", "Hope Valley Experimental School", "August Town Primary School",
        "Pembroke Hall Primary School", "St. Richard's Primary School", "Constant Spring Primary School",
        "Half Way Tree Primary School", "Maverley Primary School", "Duhaney Park Primary School",
        "Washington Gardens Primary School", "Penwood High School", "St. Hugh's High School", "Oberlin High School",
        "St. Andrew Technical High School", "Donald Quarrie High School", "Vauxhall High School",
        "Haile Selassie High School", "St. Jude's Primary School", "Seaview Gardens Primary School",
        "Olympic Gardens Community Centre", "Drewsland Community Centre",
    ),
    "St. Catherine": (
        "Spanish Town High School", "St. Catherine High School", "Bog Walk High School", "Old Harbour High School",
        "St. Jago High School", "Jonathan Grant High School", "Ensom City High School", "Innswood High School",
        "Jose Marti Technical High School", "Waterford High School", "Claude McKay High School",
        "Spanish Town Primary School", "Eltham Primary School", "Angels Primary School", "Willowdene Primary School",
        "Central Village Primary School", "Gregory Park Primary School", "Independence City Primary School",
        "Naggo Head Primary School", "Portsmouth Primary School", "Braeton Primary School",
        "Bridgeport High School", "Greater Portmore High School", "Portmore Community College",
        "Ascot High School", "Cumberland High School", "Bridgeport Primary School", "Southborough Primary School",
        "Hellshire Primary School", "Waterford Primary School", "Christian Fellowship World Outreach Centre",
        "Edgewater Community Centre", "Passage Fort Community Centre", "Old Harbour Bay Community Centre",
    ),
    "Clarendon": (
        "Clarendon College", "Glenmuir High School", "Vere Technical High School", "Lennon High School",
        "Edwin Allen High School", "Kemps Hill High School", "Central High School", "Claude Stuart High School",
        "Knox College", "May Pen High School", "Denbigh High School", "Thompson Town High School",
        "May Pen Primary School", "Four Paths Primary School", "Chapelton Primary School",
        "Frankfield Primary School", "Rock River Primary School", "Spaldings Primary School",
        "Milk River Primary School", "Lionel Town Primary School", "Race Course Primary School",
        "Grantham Primary School", "Mocho Primary School", "Kellits Primary School",
    ),
    "St. James": (
        "Cornwall College", "Herbert Morrison Technical", "Montego Bay High", "St. James High", "Anchovy High",
        "Cambridge High", "Green Pond High", "Irwin High", "Maldon High", "Mount Alvernia High",
        "Spot Valley High", "William Knibb High",
    ),
    "Manchester": (
        "Manchester High", "DeCarteret College", "Belair High", "Bishop Gibson High", "Holmwood Technical",
        "May Day High", "Mile Gully High", "Porus High", "Bellefield High", "Knox Community College",
    ),
    "St. Ann": (
        "St. Hilda's High", "Brown's Town Community College", "Ocho Rios High", "Ferncourt High",
        "Marcus Garvey Technical", "Oracabessa High", "Exchange Primary", "Steer Town Primary",
    ),
    "Portland": (
        "Titchfield High", "Port Antonio High", "Happy Grove High", "Fair Prospect High", "Buff Bay High",
        "Buff Bay Primary", "Hope Bay Primary", "Boston Primary",
    ),
    "St. Mary": (
        "St. Mary High", "York Castle High", "Annotto Bay High", "Brimmervale High", "Carron Hall High",
        "Iona High", "Islington High", "Oracabessa High", "Port Maria High", "St. Mary Technical",
    ),
    "St. Thomas": (
        "Morant Bay High", "Paul Bogle High", "Robert Lightbourne High", "St. Thomas Technical", "Seaforth High",
        "Yallahs High", "Cedar Grove Primary", "Golden Grove Primary",
    ),
    "Westmoreland": (
        "Manning's School", "Frome Technical", "Petersfield High", "Knockalva Polytechnic", "Maud McLeod High",
        "Godfrey Stewart High", "Little London High", "Rusea's High Extension",
    ),
    "Hanover": (
        "Rusea's High", "Green Island High", "Hopewell High", "Rhodes Hall High", "Sandy Bay Primary",
        "Lucea Primary", "Esher Primary", "Mount Peto Primary",
    ),
    "Trelawny": (
        "William Knibb Memorial", "Falmouth High", "Cedric Titus High", "Albert Town High", "Christiana High",
        "Troy High", "Ulster Spring High", "Refuge Primary",
    ),
    "St. Elizabeth": (
        "Hampton School", "Munro College", "Black River High", "BB Coke High", "Lacovia High", "Maggotty High",
        "Manchester High", "Newell High", "Roger Clarke High", "St. Elizabeth Technical",
    ),
}


def generate_fallback_stations(
    parishes: tuple[Parish, ...] = PARISHES,
    names: dict[str, tuple[str, ...]] = FALLBACK_STATION_NAMES,
) -> list[PollingStationRecord]:
    """Build the synthetic station list.

    Parishes are walked in table order; within a parish, codes are assigned
    by 1-based list position (KIN001, KIN002, ...).

    Args:
        parishes: Parish table supplying names, IDs and code prefixes.
        names: Station names per parish name. Parishes absent here get none.

    Returns:
        Fresh record objects (safe for the caller to mutate).
    """
    stations: list[PollingStationRecord] = []
    for parish in parishes:
        for index, name in enumerate(names.get(parish.name, ()), start=1):
            stations.append(PollingStationRecord(
                station_code=parish.station_code(index, OutputConfig.CODE_SEQUENCE_WIDTH),
                name=name,
                address=f"{name}, {parish.name}",
                parish=parish.name,
                parish_id=parish.parish_id,
            ))
    return stations
