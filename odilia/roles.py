"""Accessible roles as defined by the accessibility bus."""

from enum import Enum


class Role(Enum):
    """The role of an accessible object."""

    Invalid = 0
    AcceleratorLabel = 1
    Alert = 2
    Animation = 3
    Arrow = 4
    Calendar = 5
    Canvas = 6
    CheckBox = 7
    CheckMenuItem = 8
    ColorChooser = 9
    ColumnHeader = 10
    ComboBox = 11
    DateEditor = 12
    DesktopIcon = 13
    DesktopFrame = 14
    Dial = 15
    Dialog = 16
    DirectoryPane = 17
    DrawingArea = 18
    FileChooser = 19
    Filler = 20
    FocusTraversable = 21
    FontChooser = 22
    Frame = 23
    GlassPane = 24
    HTMLContainer = 25
    Icon = 26
    Image = 27
    InternalFrame = 28
    Label = 29
    LayeredPane = 30
    List = 31
    ListItem = 32
    Menu = 33
    MenuBar = 34
    MenuItem = 35
    OptionPane = 36
    PageTab = 37
    PageTabList = 38
    Panel = 39
    PasswordText = 40
    PopupMenu = 41
    ProgressBar = 42
    Button = 43
    RadioButton = 44
    RadioMenuItem = 45
    RootPane = 46
    RowHeader = 47
    ScrollBar = 48
    ScrollPane = 49
    Separator = 50
    Slider = 51
    SpinButton = 52
    SplitPane = 53
    StatusBar = 54
    Table = 55
    TableCell = 56
    TableColumnHeader = 57
    TableRowHeader = 58
    TearoffMenuItem = 59
    Terminal = 60
    Text = 61
    ToggleButton = 62
    ToolBar = 63
    ToolTip = 64
    Tree = 65
    TreeTable = 66
    Unknown = 67
    Viewport = 68
    Window = 69
    Extended = 70
    Header = 71
    Footer = 72
    Paragraph = 73
    Ruler = 74
    Application = 75
    Autocomplete = 76
    Editbar = 77
    Embedded = 78
    Entry = 79
    CHART = 80
    Caption = 81
    DocumentFrame = 82
    Heading = 83
    Page = 84
    Section = 85
    RedundantObject = 86
    Form = 87
    Link = 88
    InputMethodWindow = 89
    TableRow = 90
    TreeItem = 91
    DocumentSpreadsheet = 92
    DocumentPresentation = 93
    DocumentText = 94
    DocumentWeb = 95
    DocumentEmail = 96
    Comment = 97
    ListBox = 98
    Grouping = 99
    ImageMap = 100
    Notification = 101
    InfoBar = 102
    LevelBar = 103
    TitleBar = 104
    BlockQuote = 105
    Audio = 106
    Video = 107
    Definition = 108
    Article = 109
    Landmark = 110
    Log = 111
    Marquee = 112
    Math = 113
    Rating = 114
    Timer = 115
    Static = 116
    MathFraction = 117
    MathRoot = 118
    Subscript = 119
    Superscript = 120
    DescriptionList = 121
    DescriptionTerm = 122
    DescriptionValue = 123
    Footnote = 124
    ContentDeletion = 125
    ContentInsertion = 126
    Mark = 127
    Suggestion = 128
    PushButtonMenu = 129