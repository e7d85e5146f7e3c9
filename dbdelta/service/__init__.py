from dbdelta.service.snapshot import *
from dbdelta.service.assertion import *
from dbdelta.service.setup import *
