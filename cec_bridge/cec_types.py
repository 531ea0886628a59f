from enum import Enum, IntEnum


class DeviceType(Enum):
    """Device type letters accepted by `cec-client -t`."""

    Recording = "r"
    Playback = "p"
    Tuner = "t"
    Audio = "a"


class LogicalAddress(IntEnum):
    Unknown = -1
    TV = 0
    RecordingDevice1 = 1
    RecordingDevice2 = 2
    Tuner1 = 3
    PlaybackDevice1 = 4
    AudioSystem = 5
    Tuner2 = 6
    Tuner3 = 7
    PlaybackDevice2 = 8
    RecordingDevice3 = 9
    Tuner4 = 10
    PlaybackDevice3 = 11
    Reserved1 = 12
    Reserved2 = 13
    FreeUse = 14
    Unregistered = 15  # as source
    Broadcast = 15  # as target


class PowerStatus(IntEnum):
    Unknown = 0x99
    On = 0x00
    StandBy = 0x01
    ToOn = 0x02
    ToStandBy = 0x03


class UserControlButton(IntEnum):
    Select = 0x00
    Up = 0x01
    Down = 0x02
    Left = 0x03
    Right = 0x04
    RightUp = 0x05
    RightDown = 0x06
    LeftUp = 0x07
    LeftDown = 0x08
    RootMenu = 0x09
    SetupMenu = 0x0A
    ContentsMenu = 0x0B
    FavoriteMenu = 0x0C
    Back = 0x0D
    TopMenu = 0x10
    DvdMenu = 0x11
    NumberEntryMode = 0x1D
    Num11 = 0x1E
    Num12 = 0x1F
    Num0 = 0x20
    Num1 = 0x21
    Num2 = 0x22
    Num3 = 0x23
    Num4 = 0x24
    Num5 = 0x25
    Num6 = 0x26
    Num7 = 0x27
    Num8 = 0x28
    Num9 = 0x29
    Dot = 0x2A
    Enter = 0x2B
    Clear = 0x2C
    NextFavorite = 0x2F
    ChannelUp = 0x30
    ChannelDown = 0x31
    PreviousChannel = 0x32
    SoundSelect = 0x33
    InputSelect = 0x34
    DisplayInformation = 0x35
    Help = 0x36
    PageUp = 0x37
    PageDown = 0x38
    Power = 0x40
    VolumeUp = 0x41
    VolumeDown = 0x42
    Mute = 0x43
    Play = 0x44
    Stop = 0x45
    Pause = 0x46
    Record = 0x47
    Rewind = 0x48
    FastForward = 0x49
    Eject = 0x4A
    Forward = 0x4B
    Backward = 0x4C
    StopRecord = 0x4D
    PauseRecord = 0x4E
    Angle = 0x50
    SubPicture = 0x51
    VideoOnDemand = 0x52
    ElectronicProgramGuide = 0x53
    TimerProgramming = 0x54
    InitialConfiguration = 0x55
    SelectBroadcastType = 0x56
    SelectSoundPresentation = 0x57
    PlayFunction = 0x60
    PausePlayFunction = 0x61
    RecordFunction = 0x62
    PauseRecordFunction = 0x63
    StopFunction = 0x64
    MuteFunction = 0x65
    RestoreVolumeFunction = 0x66
    TuneFunction = 0x67
    SelectMediaFunction = 0x68
    SelectAvInputFunction = 0x69
    SelectAudioInputFunction = 0x6A
    PowerToggleFunction = 0x6B
    PowerOffFunction = 0x6C
    PowerOnFunction = 0x6D
    F1Blue = 0x71
    F2Red = 0x72
    F3Green = 0x73
    F4Yellow = 0x74
    F5 = 0x75
    Data = 0x76
    AnReturn = 0x91
    AnChannelsList = 0x96


class OperationCode(IntEnum):
    """CEC opcodes. Member names double as event names (`op.<NAME>`)."""

    FEATURE_ABORT = 0x00
    IMAGE_VIEW_ON = 0x04
    TUNER_STEP_INCREMENT = 0x05
    TUNER_STEP_DECREMENT = 0x06
    TUNER_DEVICE_STATUS = 0x07
    GIVE_TUNER_DEVICE_STATUS = 0x08
    RECORD_ON = 0x09
    RECORD_STATUS = 0x0A
    RECORD_OFF = 0x0B
    TEXT_VIEW_ON = 0x0D
    RECORD_TV_SCREEN = 0x0F
    GIVE_DECK_STATUS = 0x1A
    DECK_STATUS = 0x1B
    SET_MENU_LANGUAGE = 0x32
    CLEAR_ANALOGUE_TIMER = 0x33
    SET_ANALOGUE_TIMER = 0x34
    TIMER_STATUS = 0x35
    STANDBY = 0x36
    PLAY = 0x41
    DECK_CONTROL = 0x42
    TIMER_CLEARED_STATUS = 0x43
    USER_CONTROL_PRESSED = 0x44
    USER_CONTROL_RELEASE = 0x45
    GIVE_OSD_NAME = 0x46
    SET_OSD_NAME = 0x47
    SET_OSD_STRING = 0x64
    SET_TIMER_PROGRAM_TITLE = 0x67
    SYSTEM_AUDIO_MODE_REQUEST = 0x70
    GIVE_AUDIO_STATUS = 0x71
    SET_SYSTEM_AUDIO_MODE = 0x72
    SET_AUDIO_VOLUME_LEVEL = 0x73
    REPORT_AUDIO_STATUS = 0x7A
    GIVE_SYSTEM_AUDIO_MODE_STATUS = 0x7D
    SYSTEM_AUDIO_MODE_STATUS = 0x7E
    ROUTING_CHANGE = 0x80
    ROUTING_INFORMATION = 0x81
    ACTIVE_SOURCE = 0x82
    GIVE_PHYSICAL_ADDRESS = 0x83
    REPORT_PHYSICAL_ADDRESS = 0x84
    REQUEST_ACTIVE_SOURCE = 0x85
    SET_STREAM_PATH = 0x86
    DEVICE_VENDOR_ID = 0x87
    VENDOR_COMMAND = 0x89
    VENDOR_REMOTE_BUTTON_DOWN = 0x8A
    VENDOR_REMOTE_BUTTON_UP = 0x8B
    GIVE_DEVICE_VENDOR_ID = 0x8C
    MENU_REQUEST = 0x8D
    MENU_STATUS = 0x8E
    GIVE_DEVICE_POWER_STATUS = 0x8F
    REPORT_POWER_STATUS = 0x90
    GET_MENU_LANGUAGE = 0x91
    SELECT_ANALOGUE_SERVICE = 0x92
    SELECT_DIGITAL_SERVICE = 0x93
    SET_DIGITAL_TIMER = 0x97
    CLEAR_DIGITAL_TIMER = 0x99
    SET_AUDIO_RATE = 0x9A
    INACTIVE_SOURCE = 0x9D
    CEC_VERSION = 0x9E
    GET_CEC_VERSION = 0x9F
    VENDOR_COMMAND_WITH_ID = 0xA0
    CLEAR_EXTERNAL_TIMER = 0xA1
    SET_EXTERNAL_TIMER = 0xA2
    REPORT_SHORT_AUDIO_DESCRIPTORS = 0xA3
    REQUEST_SHORT_AUDIO_DESCRIPTORS = 0xA4
    GIVE_FEATURES = 0xA5
    REPORT_FEATURES = 0xA6
    REQUEST_CURRENT_LATENCY = 0xA7
    REPORT_CURRENT_LATENCY = 0xA8
    START_ARC = 0xC0
    REPORT_ARC_STARTED = 0xC1
    REPORT_ARC_ENDED = 0xC2
    REQUEST_ARC_START = 0xC3
    REQUEST_ARC_END = 0xC4
    END_ARC = 0xC5
    CDC = 0xF8
    ABORT = 0xFF


OPCODE_NAMES: dict[int, str] = {op.value: op.name for op in OperationCode}


def client_type_for_address(address: LogicalAddress) -> DeviceType:
    match address:
        case LogicalAddress.AudioSystem:
            return DeviceType.Audio
        case (
            LogicalAddress.PlaybackDevice1
            | LogicalAddress.PlaybackDevice2
            | LogicalAddress.PlaybackDevice3
        ):
            return DeviceType.Playback
        case (
            LogicalAddress.Tuner1
            | LogicalAddress.Tuner2
            | LogicalAddress.Tuner3
            | LogicalAddress.Tuner4
        ):
            return DeviceType.Tuner
        case _:
            return DeviceType.Recording
