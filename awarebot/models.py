from datetime import datetime, timezone
from awarebot import db, login_manager
from flask_login import UserMixin


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))


class User(db.Model, UserMixin):
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(40), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    xp_points = db.Column(db.Integer, nullable=False, default=0)
    completed_modules = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    progress = db.relationship('UserProgress', backref='user', lazy=True)
    achievements = db.relationship('UserAchievement', backref='user', lazy=True)
    chat_messages = db.relationship('ChatMessage', backref='user', lazy=True)

    @property
    def level(self):
        """Tier is always derived from xp_points, never stored."""
        from awarebot.training.leveling import derive_level
        return derive_level(self.xp_points).tier

    def to_dict(self):
        return {
            "id":               self.id,
            "username":         self.username,
            "email":            self.email,
            "level":            self.level,
            "xpPoints":         self.xp_points,
            "completedModules": self.completed_modules,
        }

    def __repr__(self):
        return f"User('{self.username}', '{self.email}', xp={self.xp_points})"


class TrainingModule(db.Model):
    """
    Authored content. type: 'article' | 'quiz' | 'scenario' | 'video'
    difficulty: 'beginner' | 'intermediate' | 'advanced'
    content is only parsed as a quiz when type == 'quiz'.
    """
    __tablename__ = 'training_module'

    id          = db.Column(db.Integer, primary_key=True)
    title       = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False, default='')
    type        = db.Column(db.String(20), nullable=False, default='article')
    difficulty  = db.Column(db.String(20), nullable=False, default='beginner')
    xp_reward   = db.Column(db.Integer, nullable=False, default=0)
    order       = db.Column(db.Integer, nullable=False, default=0)
    content     = db.Column(db.Text, nullable=False, default='')
    created_at  = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @property
    def is_quiz(self):
        return self.type == 'quiz'

    def to_dict(self, include_content=True):
        data = {
            "id":          self.id,
            "title":       self.title,
            "description": self.description,
            "type":        self.type,
            "difficulty":  self.difficulty,
            "xpReward":    self.xp_reward,
            "order":       self.order,
        }
        if include_content:
            data["content"] = self.content
        return data

    def __repr__(self):
        return f"TrainingModule({self.id}, '{self.title}', {self.type}, order={self.order})"


class UserProgress(db.Model):
    """
    One row per completion submission. Rows are never updated; a repeat
    submission for the same module adds a new row. rewarded marks rows that
    went through the XP reducer (False for repeats under the 'record' policy)
    and xp_awarded is what that row granted.
    first_completion is set on exactly one row per (user, module): the
    partial unique index makes concurrent first completions collide.
    """
    __tablename__ = 'user_progress'

    id               = db.Column(db.Integer, primary_key=True)
    user_id          = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    module_id        = db.Column(db.Integer, db.ForeignKey('training_module.id'), nullable=False)
    completed        = db.Column(db.Boolean, default=False, nullable=False)
    score            = db.Column(db.Float, nullable=True)
    xp_awarded       = db.Column(db.Integer, nullable=False, default=0)
    rewarded         = db.Column(db.Boolean, nullable=False, default=False)
    first_completion = db.Column(db.Boolean, nullable=False, default=False)
    completed_at     = db.Column(db.DateTime(timezone=True), nullable=True)

    module = db.relationship('TrainingModule', lazy=True)

    __table_args__ = (
        db.Index(
            'uq_user_progress_first_completion', 'user_id', 'module_id',
            unique=True,
            sqlite_where=db.text('first_completion = 1'),
            postgresql_where=db.text('first_completion'),
        ),
    )

    def to_dict(self):
        return {
            "id":          self.id,
            "userId":      self.user_id,
            "moduleId":    self.module_id,
            "completed":   self.completed,
            "score":       self.score,
            "xpAwarded":   self.xp_awarded,
            "rewarded":    self.rewarded,
            "completedAt": self.completed_at.isoformat() if self.completed_at else None,
        }

    def __repr__(self):
        return f"UserProgress(user={self.user_id}, module={self.module_id}, done={self.completed})"


class Achievement(db.Model):
    __tablename__ = 'achievement'

    id          = db.Column(db.Integer, primary_key=True)
    title       = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text, nullable=False, default='')
    icon        = db.Column(db.String(40), nullable=True)
    required_xp = db.Column(db.Integer, nullable=False, default=0)

    def to_dict(self):
        return {
            "id":          self.id,
            "title":       self.title,
            "description": self.description,
            "icon":        self.icon,
            "requiredXp":  self.required_xp,
        }

    def __repr__(self):
        return f"Achievement('{self.title}', xp={self.required_xp})"


class UserAchievement(db.Model):
    __tablename__ = 'user_achievement'

    id             = db.Column(db.Integer, primary_key=True)
    user_id        = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    achievement_id = db.Column(db.Integer, db.ForeignKey('achievement.id'), nullable=False)
    earned_at      = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        db.UniqueConstraint('user_id', 'achievement_id', name='uq_user_achievement'),
    )

    def __repr__(self):
        return f"UserAchievement(user={self.user_id}, achievement={self.achievement_id})"


class ThreatScenario(db.Model):
    """Current attack write-ups shown on the dashboard; new and trending ones first."""
    __tablename__ = 'threat_scenario'

    id          = db.Column(db.Integer, primary_key=True)
    title       = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False, default='')
    content     = db.Column(db.Text, nullable=False, default='')
    difficulty  = db.Column(db.String(20), nullable=False, default='beginner')
    is_new      = db.Column(db.Boolean, nullable=False, default=False)
    is_trending = db.Column(db.Boolean, nullable=False, default=False)
    created_at  = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_dict(self):
        return {
            "id":          self.id,
            "title":       self.title,
            "description": self.description,
            "content":     self.content,
            "difficulty":  self.difficulty,
            "isNew":       self.is_new,
            "isTrending":  self.is_trending,
            "createdAt":   self.created_at.isoformat(),
        }

    def __repr__(self):
        return f"ThreatScenario('{self.title}', new={self.is_new}, trending={self.is_trending})"


class OrganizationPolicy(db.Model):
    __tablename__ = 'organization_policy'

    id          = db.Column(db.Integer, primary_key=True)
    title       = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False, default='')
    content     = db.Column(db.Text, nullable=False, default='')
    category    = db.Column(db.String(40), nullable=False, default='general')
    created_at  = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_dict(self):
        return {
            "id":          self.id,
            "title":       self.title,
            "description": self.description,
            "content":     self.content,
            "category":    self.category,
            "createdAt":   self.created_at.isoformat(),
        }

    def __repr__(self):
        return f"OrganizationPolicy('{self.title}', {self.category})"


class ChatMessage(db.Model):
    """
    Assistant conversation history, one row per message.
    is_bot distinguishes assistant replies from user messages.
    """
    __tablename__ = 'chat_message'

    id        = db.Column(db.Integer, primary_key=True)
    user_id   = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    content   = db.Column(db.Text, nullable=False)
    is_bot    = db.Column(db.Boolean, nullable=False, default=False)
    timestamp = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_dict(self):
        return {
            "id":        self.id,
            "userId":    self.user_id,
            "content":   self.content,
            "isBot":     self.is_bot,
            "timestamp": self.timestamp.isoformat(),
        }

    def __repr__(self):
        return f"ChatMessage(user={self.user_id}, bot={self.is_bot})"
