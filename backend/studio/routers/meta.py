from fastapi import APIRouter

from ..constants import GRADES, SUBJECTS
from ..schemas import ContentType, DifficultyLevel

router = APIRouter(prefix="/api/meta", tags=["meta"])


@router.get("")
def get_meta():
	return {
		"subjects": SUBJECTS,
		"grades": GRADES,
		"contentTypes": [t.value for t in ContentType],
		"difficulties": [d.value for d in DifficultyLevel],
	}
