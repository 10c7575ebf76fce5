from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


class _Record:
    # JSON field name -> column attribute
    FIELDS = {}

    def to_dict(self):
        return {key: getattr(self, attr) for key, attr in self.FIELDS.items()}

    @classmethod
    def columns(cls, fields):
        return {cls.FIELDS[key]: value for key, value in fields.items()}


class Project(_Record, db.Model):
    __tablename__ = "projects"

    pk = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(36), unique=True, nullable=False)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    status = db.Column(db.String(40), nullable=False)
    start_date = db.Column(db.String(32))
    end_date = db.Column(db.String(32))
    budget = db.Column(db.Float, nullable=False, default=0)
    created_at = db.Column(db.String(40), nullable=False)

    FIELDS = {
        "id": "id",
        "name": "name",
        "description": "description",
        "status": "status",
        "startDate": "start_date",
        "endDate": "end_date",
        "budget": "budget",
        "createdAt": "created_at",
    }


class Task(_Record, db.Model):
    __tablename__ = "tasks"

    pk = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(36), unique=True, nullable=False)
    project_id = db.Column(db.String(36), db.ForeignKey("projects.id"), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    status = db.Column(db.String(40), nullable=False)
    assigned_to = db.Column(db.String(120))
    due_date = db.Column(db.String(32))
    estimated_hours = db.Column(db.Float, nullable=False, default=0)

    FIELDS = {
        "id": "id",
        "projectId": "project_id",
        "title": "title",
        "status": "status",
        "assignedTo": "assigned_to",
        "dueDate": "due_date",
        "estimatedHours": "estimated_hours",
    }


class TimeEntry(_Record, db.Model):
    __tablename__ = "time_entries"

    pk = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(36), unique=True, nullable=False)
    project_id = db.Column(db.String(36))
    task_id = db.Column(db.String(36))
    description = db.Column(db.Text)
    start_time = db.Column(db.String(40), nullable=False)
    end_time = db.Column(db.String(40))
    duration_minutes = db.Column(db.Integer, nullable=False, default=0)
    status = db.Column(db.String(20), nullable=False)

    FIELDS = {
        "id": "id",
        "projectId": "project_id",
        "taskId": "task_id",
        "description": "description",
        "startTime": "start_time",
        "endTime": "end_time",
        "durationMinutes": "duration_minutes",
        "status": "status",
    }
