"""Registry of remote source documents.

Registration order is significant: sources are processed, and duplicate
records are resolved, in the order listed here.
"""

from station_extractor.pydantic_models.stations import Source


DEFAULT_SOURCES: tuple[Source, ...] = (
    Source(
        name="Main ECJ Document",
        url="https://ecj.com.jm/wp-content/uploads/2024/05/2024LocalGovernmentSummaryResults.pdf",
    ),
    Source(
        name="Portmore Municipality Document",
        url="https://ecj.com.jm/wp-content/uploads/2024/03/PortmoreCityMunicipalityElection2024-Summary.pdf",
    ),
    Source(
        name="Final Count Document",
        url="https://ecj.com.jm/wp-content/uploads/2024/03/Press-Release-Final-Count-for-the-Local-Government-Elections-2024.pdf",
    ),
    Source(
        name="Candidate Listing Document",
        url="https://ecj.com.jm/wp-content/uploads/2024/02/Councillor-Candidates-Listing-Local-Government-Election-2024.pdf",
    ),
)
