"""Engine subpackage - markup pipeline, stages and money arithmetic."""
from .errors import MarkupError, ParseError, MissingStateError, InvalidQuantityError
from .models import Category, Invocation, Job
from .money import Money
from .pipeline import MarkupPipeline, build_pipeline, run_pipeline
from .rates import RateTable
from .sinks import PrintSink, RecordingSink, Sink

__all__ = [
    'MarkupError', 'ParseError', 'MissingStateError', 'InvalidQuantityError',
    'Category', 'Invocation', 'Job', 'Money',
    'MarkupPipeline', 'build_pipeline', 'run_pipeline',
    'RateTable', 'PrintSink', 'RecordingSink', 'Sink',
]
