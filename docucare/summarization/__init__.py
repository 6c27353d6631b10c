from docucare.summarization.factory import SummarizerFactory
from docucare.summarization.response_parser import parse_summary
from docucare.summarization.summarizer import Summarizer

__all__ = ["Summarizer", "SummarizerFactory", "parse_summary"]
