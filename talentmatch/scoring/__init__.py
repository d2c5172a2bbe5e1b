from talentmatch.scoring.scorer import QualityScorer
from talentmatch.scoring.vocabulary import load_vocabulary

__all__ = ["QualityScorer", "load_vocabulary"]
