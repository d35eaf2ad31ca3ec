from scratchkit.mydoc import Stu, Teacher, meet, version


def test_version(capsys):
    version()
    assert capsys.readouterr().out == "v1.0.0\n"


def test_stu_study():
    stu = Stu(name="zhangsan")
    assert stu.code == 0
    stu.study()
    assert stu.code == 1


def test_meet(capsys):
    stu = Stu(name="zhangsan")
    teacher = Teacher(name="lisi")
    meet(teacher, stu)
    assert capsys.readouterr().out == "lisi: Hello zhangsan\nzhangsan: Hello Mr.lisi\n"