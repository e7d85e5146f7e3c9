from dbdelta.data.error import *
from dbdelta.data.frozen_dict import *
from dbdelta.data.data_type import *
from dbdelta.data.column import *
from dbdelta.data.api import *
from dbdelta.data.db_config import *
from dbdelta.data.config import *
from dbdelta.data.digest import *
from dbdelta.data.value import *
from dbdelta.data.row import *
from dbdelta.data.result_set import *
from dbdelta.data.cursor import *
from dbdelta.data.cursor_provider import *
from dbdelta.data.log import *
from dbdelta.data.database import *
from dbdelta.data.snapshot_tracker import *
from dbdelta.data.data_set import *
from dbdelta.data.data_source import *
from dbdelta.data.delta_result import *
from dbdelta.data.assertion_result import *
from dbdelta.data.classify_delta import *
from dbdelta.data.evaluate_assertion import *
