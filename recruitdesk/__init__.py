"""RecruitDesk: recruiter dashboard logic for an applicant tracking system."""

__app_name__ = "RecruitDesk"
__version__ = "0.1.0"
