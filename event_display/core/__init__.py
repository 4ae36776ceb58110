"""
事例显示核心模块

该子包包含径迹重建的核心功能模块：
- constants: 粒子编码和常数
- data_classes: 数据结构定义（StepRecord, Track, EventRecord, Polyline）
- errors: 异常类型
- attributes: 粒子分类和径迹样式
- selection: 事例选择和排序
- assembly: 径迹组装
- storage: 模拟输出文件读取
- source: 输入格式识别
- geometry: GDML几何读取 (pyg4ometry)
- io_utils: 输入输出工具
"""

# 常数
from .constants import (
    PDG,
    DEBUG,
    STEP_SORT_KEYS,
)

# 数据类
from .data_classes import (
    StepRecord,
    Step,
    Track,
    EventRecord,
    Polyline,
    TrackStyle,
    Solid,
    Volume,
)

# 异常
from .errors import (
    EventDisplayError,
    OutOfRangeError,
    EventNotFoundError,
    UnsupportedSchemaError,
    MissingRequiredInputError,
    MalformedRecordError,
)

# 粒子分类
from .attributes import (
    particle_label,
    track_style,
    TrackClassifier,
    DEFAULT_STYLE,
)

# 事例选择
from .selection import (
    event_range,
    sort_index,
    select_steps,
)

# 径迹组装
from .assembly import (
    assemble_step_tracks,
    assemble_event_tracks,
    build_track_polyline,
    track_name,
)

# 文件读取
from .storage import (
    StepTable,
    MemoryStorage,
    RootStorage,
    CsvStorage,
    open_storage,
)

# 输入格式
from .source import (
    SchemaKind,
    detect_schema,
    EventViewer,
)

# 几何
from .geometry import (
    load_gdml,
    convert_solid,
    mesh_edges,
    find_node,
    hide_volume,
    iter_placed,
    volume_depth,
)

# IO工具
from .io_utils import export_polylines_to_csv

__all__ = [
    # 常数
    'PDG',
    'DEBUG',
    'STEP_SORT_KEYS',
    # 数据类
    'StepRecord',
    'Step',
    'Track',
    'EventRecord',
    'Polyline',
    'TrackStyle',
    'Solid',
    'Volume',
    # 异常
    'EventDisplayError',
    'OutOfRangeError',
    'EventNotFoundError',
    'UnsupportedSchemaError',
    'MissingRequiredInputError',
    'MalformedRecordError',
    # 粒子分类
    'particle_label',
    'track_style',
    'TrackClassifier',
    'DEFAULT_STYLE',
    # 事例选择
    'event_range',
    'sort_index',
    'select_steps',
    # 径迹组装
    'assemble_step_tracks',
    'assemble_event_tracks',
    'build_track_polyline',
    'track_name',
    # 文件读取
    'StepTable',
    'MemoryStorage',
    'RootStorage',
    'CsvStorage',
    'open_storage',
    # 输入格式
    'SchemaKind',
    'detect_schema',
    'EventViewer',
    # 几何
    'load_gdml',
    'convert_solid',
    'mesh_edges',
    'find_node',
    'hide_volume',
    'iter_placed',
    'volume_depth',
    # IO
    'export_polylines_to_csv',
]
