from talentmatch.summarization.base import BaseSummarizer
from talentmatch.summarization.factory import SummarizerFactory
from talentmatch.summarization.summarizer import Summarizer

__all__ = ["BaseSummarizer", "Summarizer", "SummarizerFactory"]
