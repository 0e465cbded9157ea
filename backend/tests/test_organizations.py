from datetime import date, datetime, timezone

from conftest import add_profile
from medlink.crud import career as career_crud
from medlink.crud import event as event_crud
from medlink.crud import institution as institution_crud
from medlink.crud import job as job_crud
from medlink.schemas.career import EducationCreate, ExperienceCreate
from medlink.schemas.organization import (
    EventCreate,
    EventRegistration,
    InstitutionCreate,
    JobApplicationCreate,
    JobCreate,
)
from medlink.store.guard import Outcome


async def test_experience_and_education_latest_first(db):
    await add_profile(db, "alice")
    await career_crud.add_experience(db, ExperienceCreate(
        profile_id="alice", title="Resident", company="St. Mary", start_date=date(2015, 7, 1), end_date=date(2019, 6, 30),
    ))
    await career_crud.add_experience(db, ExperienceCreate(
        profile_id="alice", title="Attending", company="City General", start_date=date(2019, 8, 1), current=True,
    ))
    await career_crud.add_education(db, EducationCreate(
        profile_id="alice", school="Med School", degree="MD", field="Medicine", start_date=date(2011, 9, 1),
    ))

    experiences = await career_crud.get_experiences(db, "alice")
    education = await career_crud.get_education(db, "alice")

    assert [e.title for e in experiences.value] == ["Attending", "Resident"]
    assert experiences.value[0].current is True
    assert [e.degree for e in education.value] == ["MD"]
    assert (await career_crud.get_experiences(db, "bob")).value == []


async def test_jobs_carry_company_and_poster(db):
    await add_profile(db, "recruiter", full_name="Rita Recruiter")
    institution = await institution_crud.create_institution(
        db, InstitutionCreate(name="City General", type="hospital", specialties=["Cardiology"]),
    )
    await job_crud.create_job(db, JobCreate(
        title="Cardiology Fellow", company_id=institution.value.id, posted_by="recruiter",
    ))
    await job_crud.create_job(db, JobCreate(title="Locum GP", company_id="gone", posted_by="gone"))

    jobs = await job_crud.get_jobs(db)

    by_title = {j.title: j for j in jobs.value}
    assert by_title["Cardiology Fellow"].company.name == "City General"
    assert by_title["Cardiology Fellow"].posted_by_user.full_name == "Rita Recruiter"
    assert by_title["Locum GP"].company is None
    assert by_title["Locum GP"].posted_by_user is None


async def test_apply_to_job(db):
    await add_profile(db, "alice")
    job = await job_crud.create_job(db, JobCreate(title="Night Nurse"))

    application = await job_crud.apply_to_job(
        db, JobApplicationCreate(job_id=job.value.id, applicant_id="alice", cover_letter="Hi"),
    )

    assert application.outcome is Outcome.SUCCESS
    assert application.value.status == "pending"


async def test_institutions_newest_first(db):
    await institution_crud.create_institution(db, InstitutionCreate(name="First"))
    await institution_crud.create_institution(db, InstitutionCreate(name="Second"))

    result = await institution_crud.get_institutions(db)

    assert [i.name for i in result.value] == ["Second", "First"]
    assert result.value[0].specialties == []


async def test_events_soonest_first_with_organizer(db):
    await add_profile(db, "org", full_name="Dr. Organizer")
    await event_crud.create_event(db, EventCreate(
        title="Summit", organizer_id="org", start_date=datetime(2025, 5, 1, tzinfo=timezone.utc),
    ))
    early = await event_crud.create_event(db, EventCreate(
        title="Workshop", organizer_id="org", start_date=datetime(2025, 3, 1, tzinfo=timezone.utc), is_virtual=True,
    ))

    events = await event_crud.get_events(db)

    assert [e.title for e in events.value] == ["Workshop", "Summit"]
    assert events.value[0].organizer.full_name == "Dr. Organizer"

    registration = await event_crud.register_for_event(
        db, EventRegistration(event_id=early.value.id, attendee_id="org"),
    )
    assert registration.value.status == "registered"


async def test_organization_reads_unavailable(bare_db):
    assert (await job_crud.get_jobs(bare_db)).value == []
    assert (await event_crud.get_events(bare_db)).value == []
    assert (await institution_crud.get_institutions(bare_db)).value == []
    created = await institution_crud.create_institution(bare_db, InstitutionCreate(name="Nowhere"))
    assert created.outcome is Outcome.UNAVAILABLE
    assert created.value is None
