"""
Sample data for the CLI, the API defaults and the benchmark harness.

REFERENCE_PROFILE is a Glendale, CA pressure-washing contractor with a
40-mile service radius. The expectations in BENCHMARK_CASES are computed
against that profile.
"""

from __future__ import annotations

from textwrap import dedent

from rfp_screening.models.enums import Decision, EntityType, OshaLevel, PaymentTerms
from rfp_screening.models.profile import (
    ColdWaterUnit,
    CompanyProfile,
    CoveragePolicy,
    HotWaterUnit,
    ProfileBasics,
    ProfileCertifications,
    ProfileEquipment,
    ProfileInsurance,
    ProfileOperational,
    ProfileServices,
    WorkersCompPolicy,
)
from rfp_screening.models.schemas import BenchmarkCase, ScoreRange

REFERENCE_COMPANY_ID = "hydrojet-pros"

REFERENCE_PROFILE = CompanyProfile(
    company_id=REFERENCE_COMPANY_ID,
    basics=ProfileBasics(
        company_name="HydroJet Pros",
        address="1200 N Central Ave",
        city="Glendale",
        state="CA",
        zip="91201",
        year_established=2015,
        entity_type=EntityType.LLC,
        ein="95-1234567",
        employees=12,
        crews=3,
        service_radius=40,
    ),
    insurance=ProfileInsurance(
        general_liability=CoveragePolicy(amount=2_000_000, carrier="Hartford", expiry="2026-12-31"),
        workers_comp=WorkersCompPolicy(has_it=True, carrier="State Fund", expiry="2026-12-31"),
        commercial_auto=CoveragePolicy(amount=1_000_000, carrier="Progressive", expiry="2026-12-31"),
    ),
    services=ProfileServices(
        building_exterior=True,
        concrete=True,
        parking_structure=True,
        graffiti=True,
        emergency247=True,
        oil_stain=True,
        gum_removal=True,
        drive_through=True,
        dumpster_areas=True,
        sidewalks=True,
        graffiti_removal=True,
        fleet_washing=False,
        solar_panels=False,
        windows=False,
        roof_cleaning=False,
    ),
    equipment=ProfileEquipment(
        hot_water=HotWaterUnit(capable=True, max_temp=200, psi=3500),
        cold_water=ColdWaterUnit(capable=True, psi=4000),
        water_recovery=False,
        number_of_trucks=3,
        aerial_lift=False,
        surface_cleaners=True,
        epa_approved_chemicals=True,
    ),
    certifications=ProfileCertifications(
        business_license=True,
        contractor_license=True,
        epa_compliant=False,
        osha_level=OshaLevel.TEN_HOUR,
        prevailing_wage=True,
        sam_registration=False,
        small_business=True,
    ),
    operational=ProfileOperational(
        night_work=True,
        weekend_work=True,
        holiday_work=False,
        minimum_contract=500,
        emergency_response_time=4,
        payment_terms_required=PaymentTerms.NET_30,
    ),
)


SAMPLE_RFPS: dict[str, str] = {
    "glendale-city-hall": dedent("""\
        RFP #GLN-2025-001
        Location: 613 E Broadway, Glendale, CA 91206
        Scope: Monthly building washing of the exterior, sidewalk cleaning,
        and parking garage pressure washing.
        Requirements:
        - General Liability insurance of $1M minimum
        - Hot water equipment rated 3000 PSI or higher
        - Contractor must hold a current business license
    """),
    "burbank-airport": dedent("""\
        RFP #BUR-2025-APT
        Location: 2627 N Hollywood Way, Burbank, CA 91505
        Scope: Quarterly exterior cleaning of terminal buildings.
        Approach walkways need sidewalk cleaning as well.
        Requirements:
        - General Liability: $2,000,000 per occurrence
        - Operations must be EPA compliant
        - Night work required; all washing after terminal closing
    """),
    "monterey-park-sidewalks": dedent("""\
        Monterey Park Public Works - Sidewalk Maintenance
        Location: 320 W Newmark Ave, Monterey Park, CA 91754
        Scope: sidewalk cleaning and gum removal along the city's commercial corridors.
        Requirements:
        - General Liability $1M
        - Workers' compensation insurance
    """),
    "monterey-park-shopping-center": dedent("""\
        Location: Monterey Park, CA
        Services: Pressure washing of shopping center
        Requirements: $1M insurance
    """),
    "riverside-transit": dedent("""\
        Riverside County Transit Center
        Location: 4066 Vine St, Riverside, CA 92501
        Quarterly cleaning of the bus plaza.
    """),
    "downtown-office-tower": dedent("""\
        Downtown LA Office Tower - Plaza Cleaning
        Location: 355 S Grand Ave, Los Angeles, CA 90071
        Scope: building washing and graffiti removal, weekend schedule.
        Requirements:
        - OSHA 30-hour certified supervisor on site
        - ISO 14001 environmental management
        - Commercial auto liability $1M
    """),
    "san-francisco-civic-center": dedent("""\
        San Francisco Civic Center - Pressure Washing Services
        Location: 1 Dr Carlton B Goodlett Pl, San Francisco, CA 94102
        Scope: window cleaning, roof cleaning and solar panel washing for civic buildings.
        Requirements:
        - General Liability $5M
        - Umbrella policy $2M
        - SAM registration and CAGE code required
        - Aerial lift access for multi-story facades
    """),
    "santa-monica-parking": dedent("""\
        Santa Monica Pier Parking Structures
        Location: 1550 Pacific Coast Hwy, Santa Monica, CA 90401
        Scope: parking structure deck washing, oil stain removal,
        and fleet washing of city vehicles.
        Requirements:
        - Water recovery system mandatory (storm drain protection)
        - Emergency response within 2 hours
        - Crew lead must hold OSHA 30-hour card
        - Workers comp required
    """),
}


BENCHMARK_CASES: list[BenchmarkCase] = [
    BenchmarkCase(
        case_id="glendale-city-hall",
        name="Glendale City Hall - local, full match",
        content=SAMPLE_RFPS["glendale-city-hall"],
        expected_score=ScoreRange(min=95, max=100),
        expected_decision=Decision.GO,
        expected_geographic=100,
        expected_insurance=100,
        expected_services=100,
        expected_certifications=100,
    ),
    BenchmarkCase(
        case_id="burbank-airport",
        name="Burbank Airport - nearby, EPA gap",
        content=SAMPLE_RFPS["burbank-airport"],
        expected_score=ScoreRange(min=85, max=90),
        expected_decision=Decision.GO,
        expected_geographic=100,
        expected_insurance=100,
        expected_services=100,
        expected_certifications=50,
    ),
    BenchmarkCase(
        case_id="monterey-park-sidewalks",
        name="Monterey Park - resolvable nearby distance",
        content=SAMPLE_RFPS["monterey-park-sidewalks"],
        expected_score=ScoreRange(min=95, max=100),
        expected_decision=Decision.GO,
        expected_geographic=100,
        notes="A known distance inside the radius must score 100, never 50",
    ),
    BenchmarkCase(
        case_id="monterey-park-shopping-center",
        name="Monterey Park - city only, no ZIP",
        content=SAMPLE_RFPS["monterey-park-shopping-center"],
        expected_score=ScoreRange(min=95, max=100),
        expected_decision=Decision.GO,
        expected_geographic=100,
        notes="A recognised city without a ZIP resolves to a distance instead of scoring 50",
    ),
    BenchmarkCase(
        case_id="riverside-transit",
        name="Riverside - outside the service radius",
        content=SAMPLE_RFPS["riverside-transit"],
        expected_score=ScoreRange(min=74, max=76),
        expected_decision=Decision.GO,
        expected_geographic=0,
        expected_insurance=100,
        expected_services=100,
        expected_certifications=100,
        notes="Unspecified dimensions score 100 and still carry a quarter of the total",
    ),
    BenchmarkCase(
        case_id="downtown-office-tower",
        name="Downtown LA - OSHA 30-hour gap, ISO partial credit",
        content=SAMPLE_RFPS["downtown-office-tower"],
        expected_score=ScoreRange(min=85, max=90),
        expected_decision=Decision.GO,
        expected_certifications=50,
    ),
    BenchmarkCase(
        case_id="san-francisco-civic-center",
        name="San Francisco - out of area, wrong service lines",
        content=SAMPLE_RFPS["san-francisco-civic-center"],
        expected_score=ScoreRange(min=0, max=15),
        expected_decision=Decision.NO_GO,
        expected_geographic=0,
        expected_insurance=35.6,
        expected_services=0,
        expected_certifications=0,
    ),
    BenchmarkCase(
        case_id="santa-monica-parking",
        name="Santa Monica - equipment and response-time gaps",
        content=SAMPLE_RFPS["santa-monica-parking"],
        expected_score=ScoreRange(min=70, max=75),
        expected_decision=Decision.MAYBE,
        expected_geographic=100,
        expected_insurance=100,
        expected_services=66.7,
        expected_certifications=25,
    ),
]
